"""
Health domain entities.

This module defines value objects for representing dependency probes,
their per-request outcomes and the aggregated health of the service.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, FrozenSet, List, Mapping, Optional


class HealthStatus(str, Enum):
    """Availability of a dependency or of the whole service."""

    HEALTHY = "Healthy"
    DEGRADED = "Degraded"
    UNHEALTHY = "Unhealthy"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]


_SEVERITY = {
    HealthStatus.HEALTHY: 0,
    HealthStatus.DEGRADED: 1,
    HealthStatus.UNHEALTHY: 2,
}


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Value returned by a probe's check capability."""

    status: HealthStatus
    description: Optional[str] = None
    data: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def healthy(
        cls, description: Optional[str] = None, data: Optional[Mapping[str, Any]] = None
    ) -> "CheckResult":
        return cls(HealthStatus.HEALTHY, description, dict(data or {}))

    @classmethod
    def degraded(
        cls, description: Optional[str] = None, data: Optional[Mapping[str, Any]] = None
    ) -> "CheckResult":
        return cls(HealthStatus.DEGRADED, description, dict(data or {}))

    @classmethod
    def unhealthy(
        cls, description: Optional[str] = None, data: Optional[Mapping[str, Any]] = None
    ) -> "CheckResult":
        return cls(HealthStatus.UNHEALTHY, description, dict(data or {}))


ProbeCheck = Callable[[], Awaitable[CheckResult]]


@dataclass(frozen=True, slots=True)
class ProbeDescriptor:
    """A named dependency probe, immutable once registered."""

    name: str
    check: ProbeCheck
    timeout: float
    tags: FrozenSet[str] = frozenset()

    def __post_init__(self) -> None:
        # Accept any iterable of tags from callers
        object.__setattr__(self, "tags", frozenset(self.tags))


@dataclass(slots=True)
class ProbeOutcome:
    """Result of running a single probe during one health request."""

    name: str
    status: HealthStatus
    description: Optional[str] = None
    duration: float = 0.0
    data: Dict[str, Any] = field(default_factory=dict)
    tags: FrozenSet[str] = frozenset()


@dataclass(slots=True)
class AggregateResult:
    """Aggregated health for the service, entries in registration order."""

    status: HealthStatus
    total_duration: float = 0.0
    entries: List[ProbeOutcome] = field(default_factory=list)


@dataclass(slots=True)
class ApplicationInfo:
    """Operational metadata surfaced by the /info endpoint."""

    name: str
    description: str
    version: str
    environment: str
    git_commit: str
    build_time: str
    started_at: datetime
    uptime_seconds: float
    status: HealthStatus
    entries: List[ProbeOutcome] = field(default_factory=list)
    extras: Dict[str, Any] = field(default_factory=dict)
