"""Infrastructure services package."""

from .dependency_probes import (
    build_probe_registry,
    ping_check,
    ping_probe,
    postgres_probe,
    redis_probe,
)
from .health_check_service import HealthCheckService

__all__ = [
    "HealthCheckService",
    "build_probe_registry",
    "ping_check",
    "ping_probe",
    "postgres_probe",
    "redis_probe",
]
