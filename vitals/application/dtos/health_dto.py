"""DTOs for the health and application info responses."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from vitals.domain.entities.health import (
    AggregateResult,
    ApplicationInfo,
    HealthStatus,
    ProbeOutcome,
)


def json_safe(text: str) -> str:
    """Escape code points UTF-8 cannot encode, such as lone surrogates."""
    return text.encode("utf-8", errors="backslashreplace").decode("utf-8")


def _coerce_value(value: Any) -> str:
    if isinstance(value, str):
        return json_safe(value)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    try:
        return json_safe(str(value))
    except Exception:
        return f"<unrepresentable {type(value).__name__}>"


def coerce_data(data: Mapping[Any, Any]) -> Dict[str, str]:
    """Coerce diagnostic key/values to strings instead of dropping them."""
    return {_coerce_value(key): _coerce_value(value) for key, value in data.items()}


def _to_ms(seconds: float) -> float:
    return round(seconds * 1000, 3)


class ProbeOutcomeDTO(BaseModel):
    """Serializable representation of one probe outcome."""

    name: str = Field(description="Probe identifier")
    status: HealthStatus = Field(description="Status reported by the probe")
    description: Optional[str] = Field(
        default=None, description="Human readable status note"
    )
    duration_ms: float = Field(
        alias="durationMs", description="Probe execution time in milliseconds"
    )
    tags: List[str] = Field(default_factory=list, description="Probe tags, sorted")
    data: Dict[str, str] = Field(
        default_factory=dict, description="Diagnostic key/values"
    )

    @classmethod
    def from_domain(cls, outcome: ProbeOutcome) -> "ProbeOutcomeDTO":
        return cls(
            name=json_safe(outcome.name),
            status=outcome.status,
            description=(
                None
                if outcome.description is None
                else _coerce_value(outcome.description)
            ),
            durationMs=_to_ms(outcome.duration),
            tags=sorted(json_safe(tag) for tag in outcome.tags),
            data=coerce_data(outcome.data),
        )

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "name": "postgresql",
                "status": "Healthy",
                "description": None,
                "durationMs": 5.2,
                "tags": ["db", "postgresql", "sql"],
                "data": {"host": "db", "port": "5432", "database": "app"},
            }
        },
    )


class HealthReportDTO(BaseModel):
    """DTO representing the /healthz response payload."""

    status: HealthStatus = Field(description="Overall service status")
    total_duration_ms: float = Field(
        alias="totalDurationMs",
        description="Wall-clock time of the concurrent probe batch in milliseconds",
    )
    entries: List[ProbeOutcomeDTO] = Field(
        default_factory=list, description="Probe outcomes in registration order"
    )

    @classmethod
    def from_domain(cls, result: AggregateResult) -> "HealthReportDTO":
        return cls(
            status=result.status,
            totalDurationMs=_to_ms(result.total_duration),
            entries=[ProbeOutcomeDTO.from_domain(entry) for entry in result.entries],
        )

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "status": "Unhealthy",
                "totalDurationMs": 5.4,
                "entries": [
                    {
                        "name": "postgresql",
                        "status": "Healthy",
                        "description": None,
                        "durationMs": 5.2,
                        "tags": ["db", "postgresql", "sql"],
                        "data": {},
                    },
                    {
                        "name": "redis",
                        "status": "Unhealthy",
                        "description": "connection refused",
                        "durationMs": 2.1,
                        "tags": ["cache", "redis"],
                        "data": {},
                    },
                ],
            }
        },
    )


class ApplicationInfoDTO(BaseModel):
    """DTO representing metadata returned by /info."""

    name: str = Field(description="Application name")
    description: str = Field(description="Application description")
    version: str = Field(description="Application version")
    environment: str = Field(description="Current deployment environment")
    git_commit: str = Field(description="Git commit hash")
    build_time: str = Field(description="Build timestamp")
    started_at: datetime = Field(description="Application start timestamp")
    uptime_seconds: float = Field(description="Uptime in seconds")
    status: HealthStatus = Field(description="Overall service status")
    entries: List[ProbeOutcomeDTO] = Field(
        default_factory=list, description="Probe outcome snapshot"
    )
    extras: Dict[str, Any] = Field(
        default_factory=dict,
        description="Additional metadata and diagnostic information",
    )

    @classmethod
    def from_domain(cls, info: ApplicationInfo) -> "ApplicationInfoDTO":
        return cls(
            name=info.name,
            description=info.description,
            version=info.version,
            environment=info.environment,
            git_commit=info.git_commit,
            build_time=info.build_time,
            started_at=info.started_at,
            uptime_seconds=info.uptime_seconds,
            status=info.status,
            entries=[ProbeOutcomeDTO.from_domain(entry) for entry in info.entries],
            extras=info.extras,
        )
