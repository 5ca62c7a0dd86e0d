from __future__ import annotations

import asyncio
import itertools
from time import perf_counter
from typing import List

import pytest

from vitals.domain.entities.health import CheckResult, HealthStatus, ProbeDescriptor
from vitals.domain.services.aggregation_engine import (
    TIMED_OUT,
    AggregationEngine,
    aggregate_status,
)
from vitals.domain.services.probe_registry import ProbeRegistry
from tests.conftest import make_probe, raising_check


@pytest.mark.parametrize(
    "statuses",
    list(itertools.product(list(HealthStatus), repeat=3)),
)
def test_aggregate_status_is_worst_status(statuses) -> None:
    expected = max(statuses, key=lambda status: status.severity)
    assert aggregate_status(statuses) is expected


def test_aggregate_status_of_nothing_is_healthy() -> None:
    assert aggregate_status([]) is HealthStatus.HEALTHY


@pytest.mark.asyncio
async def test_scenario_redis_refused_is_unhealthy(scenario_registry) -> None:
    result = await AggregationEngine().run(scenario_registry)

    assert result.status is HealthStatus.UNHEALTHY
    assert [(e.name, e.status) for e in result.entries] == [
        ("postgresql", HealthStatus.HEALTHY),
        ("redis", HealthStatus.UNHEALTHY),
    ]
    assert result.entries[1].description == "connection refused"
    assert result.entries[0].tags == frozenset({"db", "sql", "postgresql"})


@pytest.mark.asyncio
async def test_all_healthy_is_healthy() -> None:
    registry = ProbeRegistry([make_probe("postgresql"), make_probe("redis")])

    result = await AggregationEngine().run(registry)

    assert result.status is HealthStatus.HEALTHY
    assert len(result.entries) == 2


@pytest.mark.asyncio
async def test_degraded_without_unhealthy_is_degraded() -> None:
    registry = ProbeRegistry(
        [make_probe("postgresql"), make_probe("redis", HealthStatus.DEGRADED)]
    )

    result = await AggregationEngine().run(registry)

    assert result.status is HealthStatus.DEGRADED


@pytest.mark.asyncio
async def test_empty_registry_is_healthy() -> None:
    result = await AggregationEngine().run(ProbeRegistry())

    assert result.status is HealthStatus.HEALTHY
    assert result.entries == []


@pytest.mark.asyncio
async def test_entries_follow_registration_order_not_completion_order() -> None:
    calls: List[str] = []
    registry = ProbeRegistry(
        [
            make_probe("slow", delay=0.05, calls=calls),
            make_probe("medium", delay=0.02, calls=calls),
            make_probe("fast", calls=calls),
        ]
    )

    result = await AggregationEngine().run(registry)

    assert [e.name for e in result.entries] == ["slow", "medium", "fast"]
    # every probe started before the first one finished
    assert calls[:3] == ["start:slow", "start:medium", "start:fast"]
    assert calls.index("end:fast") < calls.index("end:slow")


@pytest.mark.asyncio
async def test_probes_run_concurrently() -> None:
    registry = ProbeRegistry(
        [make_probe(f"probe-{i}", delay=0.1) for i in range(5)]
    )

    started = perf_counter()
    result = await AggregationEngine().run(registry)
    elapsed = perf_counter() - started

    assert elapsed < 0.4
    assert result.total_duration < 0.4
    assert result.total_duration >= 0.1
    assert all(entry.duration >= 0.09 for entry in result.entries)


@pytest.mark.asyncio
async def test_timeout_yields_unhealthy_and_does_not_block_run() -> None:
    registry = ProbeRegistry(
        [
            make_probe("postgresql", delay=0.005),
            make_probe("redis", delay=10, timeout=0.1),
        ]
    )

    started = perf_counter()
    result = await AggregationEngine().run(registry)
    elapsed = perf_counter() - started

    redis = result.entries[1]
    assert redis.status is HealthStatus.UNHEALTHY
    assert redis.description == TIMED_OUT
    assert redis.data == {"timeout_seconds": 0.1}
    assert result.entries[0].status is HealthStatus.HEALTHY
    assert result.status is HealthStatus.UNHEALTHY
    assert elapsed < 0.5


@pytest.mark.asyncio
async def test_abandoned_probe_is_cancelled() -> None:
    cancelled = asyncio.Event()

    async def hanging() -> CheckResult:
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.set()
            raise
        return CheckResult.healthy()

    registry = ProbeRegistry(
        [ProbeDescriptor(name="redis", check=hanging, timeout=0.05)]
    )

    result = await AggregationEngine().run(registry)
    await asyncio.wait_for(cancelled.wait(), timeout=1)

    assert result.entries[0].description == TIMED_OUT


@pytest.mark.asyncio
async def test_deadline_clamps_probe_timeouts() -> None:
    registry = ProbeRegistry(
        [
            make_probe("postgresql"),
            make_probe("redis", delay=10, timeout=5.0),
        ]
    )

    started = perf_counter()
    result = await AggregationEngine().run(registry, deadline=0.1)
    elapsed = perf_counter() - started

    assert result.entries[0].status is HealthStatus.HEALTHY
    assert result.entries[1].description == TIMED_OUT
    assert result.entries[1].data == {"timeout_seconds": 0.1}
    assert elapsed < 0.5


@pytest.mark.asyncio
async def test_deadline_longer_than_timeout_keeps_probe_timeout() -> None:
    registry = ProbeRegistry([make_probe("redis", delay=10, timeout=0.05)])

    result = await AggregationEngine().run(registry, deadline=30)

    assert result.entries[0].data == {"timeout_seconds": 0.05}


@pytest.mark.asyncio
async def test_exhausted_deadline_times_out_everything() -> None:
    registry = ProbeRegistry([make_probe("postgresql", delay=0.01)])

    result = await AggregationEngine().run(registry, deadline=0)

    assert result.entries[0].description == TIMED_OUT
    assert result.status is HealthStatus.UNHEALTHY


@pytest.mark.asyncio
async def test_raising_probe_is_recorded_not_propagated() -> None:
    registry = ProbeRegistry(
        [
            ProbeDescriptor(
                name="redis",
                check=raising_check(ConnectionRefusedError("connection refused")),
                timeout=1.0,
                tags=frozenset({"cache"}),
            ),
            make_probe("postgresql"),
        ]
    )

    result = await AggregationEngine().run(registry)

    assert len(result.entries) == 2
    redis = result.entries[0]
    assert redis.status is HealthStatus.UNHEALTHY
    assert redis.description == "connection refused"
    assert redis.tags == frozenset({"cache"})
    assert result.status is HealthStatus.UNHEALTHY


@pytest.mark.asyncio
async def test_exception_without_message_uses_type_name() -> None:
    registry = ProbeRegistry(
        [ProbeDescriptor(name="redis", check=raising_check(RuntimeError()), timeout=1)]
    )

    result = await AggregationEngine().run(registry)

    assert result.entries[0].description == "RuntimeError"


@pytest.mark.asyncio
async def test_check_that_is_not_a_coroutine_is_a_failure() -> None:
    def not_async() -> CheckResult:
        return CheckResult.healthy()

    registry = ProbeRegistry(
        [ProbeDescriptor(name="sync", check=not_async, timeout=1)]  # type: ignore[arg-type]
    )

    result = await AggregationEngine().run(registry)

    assert result.entries[0].status is HealthStatus.UNHEALTHY


@pytest.mark.asyncio
async def test_wrong_return_type_is_a_failure() -> None:
    async def returns_bool():
        return True

    registry = ProbeRegistry(
        [ProbeDescriptor(name="redis", check=returns_bool, timeout=1)]
    )

    result = await AggregationEngine().run(registry)

    assert result.entries[0].status is HealthStatus.UNHEALTHY
    assert "CheckResult" in result.entries[0].description


@pytest.mark.asyncio
async def test_status_given_as_plain_string_is_normalized() -> None:
    async def returns_string_status():
        return CheckResult(status="Degraded")  # type: ignore[arg-type]

    registry = ProbeRegistry(
        [ProbeDescriptor(name="redis", check=returns_string_status, timeout=1)]
    )

    result = await AggregationEngine().run(registry)

    assert result.status is HealthStatus.DEGRADED
    assert result.entries[0].status is HealthStatus.DEGRADED


@pytest.mark.asyncio
async def test_unknown_status_is_a_failure_of_that_check_only() -> None:
    async def returns_unknown_status():
        return CheckResult(status="Sick")  # type: ignore[arg-type]

    async def returns_bad_data():
        return CheckResult(status=HealthStatus.HEALTHY, data=42)  # type: ignore[arg-type]

    registry = ProbeRegistry(
        [
            make_probe("postgresql", HealthStatus.HEALTHY),
            ProbeDescriptor(name="redis", check=returns_unknown_status, timeout=1),
            ProbeDescriptor(name="queue", check=returns_bad_data, timeout=1),
        ]
    )

    result = await AggregationEngine().run(registry)

    assert result.status is HealthStatus.UNHEALTHY
    assert [(e.name, e.status) for e in result.entries] == [
        ("postgresql", HealthStatus.HEALTHY),
        ("redis", HealthStatus.UNHEALTHY),
        ("queue", HealthStatus.UNHEALTHY),
    ]
    assert "Sick" in result.entries[1].description


@pytest.mark.asyncio
async def test_probe_cancelling_itself_is_recorded() -> None:
    registry = ProbeRegistry(
        [
            ProbeDescriptor(
                name="redis",
                check=raising_check(asyncio.CancelledError()),
                timeout=1,
            )
        ]
    )

    result = await AggregationEngine().run(registry)

    assert result.entries[0].status is HealthStatus.UNHEALTHY
    assert result.entries[0].description == "CancelledError"


@pytest.mark.asyncio
async def test_run_is_idempotent_apart_from_timings(scenario_registry) -> None:
    engine = AggregationEngine()

    first = await engine.run(scenario_registry)
    second = await engine.run(scenario_registry)

    def content(result):
        return [(e.name, e.status, e.description, e.tags, e.data) for e in result.entries]

    assert content(first) == content(second)
    assert first.status is second.status


@pytest.mark.asyncio
async def test_run_filters_by_tags(scenario_registry) -> None:
    result = await AggregationEngine().run(scenario_registry, tags=["db"])

    assert [e.name for e in result.entries] == ["postgresql"]
    assert result.status is HealthStatus.HEALTHY


@pytest.mark.asyncio
async def test_data_is_copied_per_outcome() -> None:
    shared = {"host": "db"}
    registry = ProbeRegistry([make_probe("postgresql", data=shared)])

    result = await AggregationEngine().run(registry)
    result.entries[0].data["host"] = "changed"

    assert shared == {"host": "db"}


@pytest.mark.asyncio
async def test_injected_clock_drives_durations() -> None:
    ticks = iter(range(100))
    engine = AggregationEngine(clock=lambda: float(next(ticks)))

    result = await engine.run(ProbeRegistry([make_probe("postgresql")]))

    assert result.entries[0].duration == 1.0
    assert result.total_duration == 3.0
