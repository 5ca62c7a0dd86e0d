#!/usr/bin/env python3
"""
Server Entry Point - Main Layer

Runs the FastAPI application under uvicorn using the loaded settings.
"""

import uvicorn

from vitals.main.config import get_settings
from vitals.shared import get_logger

logger = get_logger(__name__)


def main() -> None:
    """Start the HTTP server."""
    settings = get_settings()

    logger.info(
        "Starting HTTP server",
        host=settings.app.host,
        port=settings.app.port,
        reload=settings.app.reload,
    )

    uvicorn.run(
        "vitals.main.app:app",
        host=settings.app.host,
        port=settings.app.port,
        reload=settings.app.reload,
        log_config=None,
    )


if __name__ == "__main__":
    main()
