"""
Domain Errors

This module defines custom error classes for domain-specific exceptions.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class DuplicateNameError(DomainError):
    """Raised when a probe is registered under a name already in use."""

    def __init__(self, name: str, details: Optional[Dict[str, Any]] = None):
        self.name = name
        message = f"Probe with name '{name}' is already registered"
        super().__init__(message, details)


class ProbeConfigurationError(DomainError):
    """Raised when a probe descriptor cannot be registered as given."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
