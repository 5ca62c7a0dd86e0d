"""
DTOs Package - Application Layer

Data Transfer Objects exchanged between the application layer and the
presentation layer.
"""

from .health_dto import (
    ApplicationInfoDTO,
    HealthReportDTO,
    ProbeOutcomeDTO,
    coerce_data,
    json_safe,
)

__all__ = [
    "ApplicationInfoDTO",
    "HealthReportDTO",
    "ProbeOutcomeDTO",
    "coerce_data",
    "json_safe",
]
