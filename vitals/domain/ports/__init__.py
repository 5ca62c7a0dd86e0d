"""Domain ports package."""

from .health_check import IHealthCheckService, IPinger

__all__ = ["IHealthCheckService", "IPinger"]
