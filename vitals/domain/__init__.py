"""
Domain Layer Package

This package contains the core rules of the health-check engine: the probe
value objects, the probe registry and the aggregation engine. It has no
dependencies on external frameworks or infrastructure concerns.
"""

# Re-export submodules
from vitals.domain import entities, ports, services

__all__ = ["entities", "services", "ports"]
