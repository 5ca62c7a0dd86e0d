"""
Infrastructure Layer Package

This package contains implementations of interfaces defined in the
domain layer: the PostgreSQL and Redis clients and the probes built on them.
"""

from vitals.infrastructure import cache, database, services

__all__ = ["cache", "database", "services"]
