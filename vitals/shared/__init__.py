"""
Shared module - Cross-cutting concerns / Shared Layer

Constants, enums and logging helpers used by every other layer. Nothing in
here may depend on Domain, Application, Infrastructure or frameworks other
than the logging stack.
"""

from .consts import (
    HEALTH_PATH,
    INFO_PATH,
    LIVENESS_PATH,
    EnumEnvironment,
    EnumLogLevel,
)
from .logging import configure_logging, get_logger, update_logging_from_settings

__all__ = [
    "HEALTH_PATH",
    "INFO_PATH",
    "LIVENESS_PATH",
    "EnumEnvironment",
    "EnumLogLevel",
    "configure_logging",
    "get_logger",
    "update_logging_from_settings",
]
