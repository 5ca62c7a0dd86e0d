"""
Domain Entities Package

This package contains the core domain entities of the health-check engine.
"""

from .errors import DomainError, DuplicateNameError, ProbeConfigurationError
from .health import (
    AggregateResult,
    ApplicationInfo,
    CheckResult,
    HealthStatus,
    ProbeCheck,
    ProbeDescriptor,
    ProbeOutcome,
)

__all__ = [
    "AggregateResult",
    "ApplicationInfo",
    "CheckResult",
    "HealthStatus",
    "ProbeCheck",
    "ProbeDescriptor",
    "ProbeOutcome",
    "DomainError",
    "DuplicateNameError",
    "ProbeConfigurationError",
]
