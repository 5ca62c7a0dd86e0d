"""Environment utilities for resolving Docker-style secret files."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

SECRET_FILE_SUFFIX = "_FILE"


def _read_secret(key: str, file_path: str) -> Optional[str]:
    try:
        return Path(file_path).read_text(encoding="utf-8").strip()
    except FileNotFoundError as exc:
        event = "env.secret_file.missing"
        error: Exception = exc
    except UnicodeDecodeError as exc:
        event = "env.secret_file.decode_failed"
        error = exc
    except OSError as exc:
        event = "env.secret_file.load_failed"
        error = exc
    logger.warning(event, extra={"key": key, "path": file_path, "error": str(error)})
    return None


def load_secret_file_variables() -> None:
    """
    Expose ``KEY_FILE`` secrets as ``KEY`` environment variables.

    Connection strings such as ``DB_POSTGRES_DSN`` usually carry credentials
    and are mounted as files in container deployments. A ``KEY`` that is
    already set wins over its file; unreadable files are logged and skipped.
    """
    for key, file_path in list(os.environ.items()):
        if not key.endswith(SECRET_FILE_SUFFIX) or not file_path:
            continue
        target_key = key[: -len(SECRET_FILE_SUFFIX)]
        if os.environ.get(target_key):
            continue
        value = _read_secret(key, file_path)
        if value is not None:
            os.environ[target_key] = value


load_secret_file_variables()
