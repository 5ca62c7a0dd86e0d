"""Response writers - Presentation Layer."""

from .health_writer import CONTENT_TYPE, DEFAULT_STATUS_CODES, status_code_for, write

__all__ = ["CONTENT_TYPE", "DEFAULT_STATUS_CODES", "status_code_for", "write"]
