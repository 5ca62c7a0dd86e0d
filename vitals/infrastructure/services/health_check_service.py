"""Infrastructure implementation of the health check port."""

from __future__ import annotations

from typing import Iterable, Optional

from vitals.domain.entities.health import AggregateResult
from vitals.domain.ports.health_check import IHealthCheckService
from vitals.domain.services.aggregation_engine import AggregationEngine
from vitals.domain.services.probe_registry import ProbeRegistry


class HealthCheckService(IHealthCheckService):
    """Run the startup-built probe registry through the aggregation engine."""

    def __init__(
        self,
        registry: ProbeRegistry,
        engine: Optional[AggregationEngine] = None,
        *,
        default_deadline: Optional[float] = None,
    ) -> None:
        self._registry = registry
        self._engine = engine or AggregationEngine()
        self._default_deadline = default_deadline

    @property
    def registry(self) -> ProbeRegistry:
        return self._registry

    async def evaluate(
        self,
        *,
        tags: Optional[Iterable[str]] = None,
        deadline: Optional[float] = None,
    ) -> AggregateResult:
        """Run the probes concurrently and aggregate their outcomes."""
        budget = deadline if deadline is not None else self._default_deadline
        return await self._engine.run(self._registry, deadline=budget, tags=tags)
