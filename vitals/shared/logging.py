"""
Logging Configuration - Shared Layer

Structured logging for the service: structlog processors rendered through the
standard library handlers, so third-party loggers (uvicorn, asyncpg, redis)
share the same output.
"""

import logging
import os
import sys
from typing import Any, Dict, List, Optional

import structlog
from structlog.types import Processor

from vitals.shared.consts import EnumEnvironment

DEFAULT_LOG_LEVEL = "INFO"

# Libraries that log every connection at INFO and drown out probe events
_CHATTY_LOGGERS = ("asyncio", "sqlalchemy.engine", "uvicorn.access")


def _get_log_config_from_env() -> Dict[str, Optional[str]]:
    """
    Read the bootstrap logging configuration from environment variables.

    Used before the settings object exists.
    """
    return {
        "level": os.environ.get("LOG_LEVEL", DEFAULT_LOG_LEVEL),
        "file_path": os.environ.get("LOG_FILE_PATH"),
        "environment": os.environ.get("ENVIRONMENT"),
    }


def _build_renderer(environment: str) -> Processor:
    if environment.lower() == EnumEnvironment.PRODUCTION.value:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def configure_logging(
    level: Optional[str] = None,
    file_path: Optional[str] = None,
    environment: Optional[str] = None,
) -> None:
    """
    Configure structlog and the standard logging root logger.

    Call once at process start, then again through
    ``update_logging_from_settings`` once settings are loaded.

    Args:
        level: Optional override for the log level.
        file_path: Optional log file, in addition to stdout.
        environment: Application environment; production renders JSON.
    """
    env_config = _get_log_config_from_env()

    log_level = (level or env_config["level"] or DEFAULT_LOG_LEVEL).upper()
    log_file = file_path or env_config["file_path"]
    env_value = environment or env_config["environment"] or "development"
    numeric_level = getattr(logging, log_level, logging.INFO)

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    timestamper = structlog.processors.TimeStamper(fmt="iso", utc=True)
    formatter = structlog.stdlib.ProcessorFormatter(
        processor=_build_renderer(env_value),
        foreign_pre_chain=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            timestamper,
        ],
    )
    for handler in handlers:
        handler.setFormatter(formatter)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            timestamper,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.handlers = handlers
    root_logger.setLevel(numeric_level)

    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    logging.info(f"Logging configured with level: {log_level}")
    if log_file:
        logging.info(f"Logging to file: {log_file}")


def update_logging_from_settings(settings: Any) -> None:
    """
    Reconfigure logging from the loaded application settings.

    Args:
        settings: The pydantic application settings object.
    """
    try:
        level = settings.logging.level
        environment = settings.environment
        configure_logging(
            level=getattr(level, "value", level),
            file_path=settings.logging.file_path,
            environment=getattr(environment, "value", environment),
        )
        logging.info("Logging configuration updated from application settings")
    except Exception as e:
        logging.error(f"Failed to update logging from settings: {e}")


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger configured for the project."""
    return structlog.get_logger(name)
