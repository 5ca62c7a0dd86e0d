"""
Application Layer Package

Use cases orchestrating the health-check engine and the DTOs they hand to
the presentation layer.
"""

# Re-export submodules
from vitals.application import dtos, models, use_cases

__all__ = ["dtos", "use_cases", "models"]
