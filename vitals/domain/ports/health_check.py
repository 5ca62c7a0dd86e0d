"""Domain abstractions for dependency probing and health aggregation."""

from __future__ import annotations

from typing import Iterable, Optional, Protocol

from vitals.domain.entities.health import AggregateResult


class IPinger(Protocol):
    """A dependency client reduced to a single liveness round-trip."""

    async def ping(self) -> None:
        """Perform a minimal round-trip; raise if the dependency is unreachable."""
        ...


class IHealthCheckService(Protocol):
    """Interface for retrieving the aggregated service health."""

    async def evaluate(
        self,
        *,
        tags: Optional[Iterable[str]] = None,
        deadline: Optional[float] = None,
    ) -> AggregateResult:
        """Run the registered probes and aggregate their outcomes."""
        ...
