"""Concurrent execution of registered probes and worst-wins aggregation."""

from __future__ import annotations

import asyncio
from time import perf_counter
from typing import Callable, Iterable, List, Optional

from vitals.domain.entities.health import (
    AggregateResult,
    CheckResult,
    HealthStatus,
    ProbeDescriptor,
    ProbeOutcome,
)
from vitals.domain.services.probe_registry import ProbeRegistry
from vitals.shared import get_logger

logger = get_logger(__name__)

TIMED_OUT = "timed out"


def aggregate_status(statuses: Iterable[HealthStatus]) -> HealthStatus:
    """Return the least healthy status, ``Healthy`` for an empty input."""
    overall = HealthStatus.HEALTHY
    for status in statuses:
        if status.severity > overall.severity:
            overall = status
        if overall is HealthStatus.UNHEALTHY:
            break
    return overall


def _discard_result(task: "asyncio.Task[CheckResult]") -> None:
    # Abandoned probes may still finish; retrieve the outcome so asyncio
    # does not report it as never retrieved.
    if not task.cancelled():
        task.exception()


class AggregationEngine:
    """Run every probe of a registry concurrently and combine the outcomes."""

    def __init__(self, clock: Callable[[], float] = perf_counter) -> None:
        self._clock = clock

    async def run(
        self,
        registry: ProbeRegistry,
        *,
        deadline: Optional[float] = None,
        tags: Optional[Iterable[str]] = None,
    ) -> AggregateResult:
        """Execute the selected probes and aggregate their outcomes.

        Args:
            registry: Probes to execute.
            deadline: Optional overall budget in seconds; each probe timeout
                is clamped to it.
            tags: Optional selector restricting the run to matching probes.

        Returns:
            The aggregate result, entries in registration order.
        """
        descriptors = registry.select(tags)
        started = self._clock()

        tasks = [
            asyncio.create_task(
                self._execute(descriptor, self._clamp(descriptor.timeout, deadline))
            )
            for descriptor in descriptors
        ]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        entries: List[ProbeOutcome] = []
        for descriptor, result in zip(descriptors, results):
            if isinstance(result, BaseException):
                entries.append(self._failure(descriptor, result, 0.0))
            else:
                entries.append(result)

        total_duration = self._clock() - started
        status = aggregate_status(entry.status for entry in entries)
        logger.debug(
            "health.run.completed",
            status=status.value,
            probes=len(entries),
            total_duration_ms=round(total_duration * 1000, 3),
        )
        return AggregateResult(
            status=status, total_duration=total_duration, entries=entries
        )

    @staticmethod
    def _clamp(timeout: float, deadline: Optional[float]) -> float:
        if deadline is None:
            return timeout
        return max(0.0, min(timeout, deadline))

    async def _execute(self, descriptor: ProbeDescriptor, timeout: float) -> ProbeOutcome:
        start = self._clock()
        task = asyncio.ensure_future(self._invoke(descriptor))
        try:
            done, _ = await asyncio.wait({task}, timeout=timeout)
        except asyncio.CancelledError:
            task.cancel()
            raise
        duration = self._clock() - start

        if not done:
            task.cancel()
            task.add_done_callback(_discard_result)
            logger.warning(
                "health.probe.timeout", probe=descriptor.name, timeout=timeout
            )
            return ProbeOutcome(
                name=descriptor.name,
                status=HealthStatus.UNHEALTHY,
                description=TIMED_OUT,
                duration=duration,
                data={"timeout_seconds": timeout},
                tags=descriptor.tags,
            )

        if task.cancelled():
            return self._failure(descriptor, asyncio.CancelledError(), duration)

        exc = task.exception()
        if exc is not None:
            return self._failure(descriptor, exc, duration)

        result = task.result()
        if not isinstance(result, CheckResult):
            return self._failure(
                descriptor,
                TypeError(
                    f"check returned {type(result).__name__}, expected CheckResult"
                ),
                duration,
            )

        try:
            status = HealthStatus(result.status)
            data = dict(result.data)
        except (TypeError, ValueError) as exc:
            return self._failure(descriptor, exc, duration)

        return ProbeOutcome(
            name=descriptor.name,
            status=status,
            description=result.description,
            duration=duration,
            data=data,
            tags=descriptor.tags,
        )

    @staticmethod
    async def _invoke(descriptor: ProbeDescriptor) -> CheckResult:
        return await descriptor.check()

    @staticmethod
    def _failure(
        descriptor: ProbeDescriptor, exc: BaseException, duration: float
    ) -> ProbeOutcome:
        description = str(exc) or type(exc).__name__
        logger.warning(
            "health.probe.failure",
            probe=descriptor.name,
            error=description,
            error_type=type(exc).__name__,
        )
        return ProbeOutcome(
            name=descriptor.name,
            status=HealthStatus.UNHEALTHY,
            description=description,
            duration=duration,
            tags=descriptor.tags,
        )
