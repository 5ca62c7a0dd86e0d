"""Probe descriptors for the service's external dependencies."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from vitals.domain.entities.health import (
    CheckResult,
    HealthStatus,
    ProbeCheck,
    ProbeDescriptor,
)
from vitals.domain.ports.health_check import IPinger
from vitals.domain.services.probe_registry import ProbeRegistry
from vitals.infrastructure.cache.redis_cache import RedisCache
from vitals.infrastructure.database.postgres_database import PostgresDatabase

POSTGRES_PROBE_NAME = "postgresql"
POSTGRES_PROBE_TAGS = frozenset({"db", "sql", "postgresql"})
REDIS_PROBE_NAME = "redis"
REDIS_PROBE_TAGS = frozenset({"cache", "redis"})


def ping_check(
    pinger: IPinger,
    *,
    failure_status: HealthStatus = HealthStatus.UNHEALTHY,
    data: Optional[Mapping[str, Any]] = None,
) -> ProbeCheck:
    """Turn a pinger into a check capability.

    A successful ping reports ``Healthy``; a ping that raises reports
    ``failure_status`` with the error message as description.
    """
    details = dict(data or {})

    async def check() -> CheckResult:
        try:
            await pinger.ping()
        except Exception as exc:
            return CheckResult(
                status=failure_status,
                description=str(exc) or type(exc).__name__,
                data=details,
            )
        return CheckResult.healthy(data=details)

    return check


def ping_probe(
    name: str,
    pinger: IPinger,
    *,
    timeout: float,
    tags: Iterable[str] = (),
    failure_status: HealthStatus = HealthStatus.UNHEALTHY,
    data: Optional[Mapping[str, Any]] = None,
) -> ProbeDescriptor:
    return ProbeDescriptor(
        name=name,
        check=ping_check(pinger, failure_status=failure_status, data=data),
        timeout=timeout,
        tags=frozenset(tags),
    )


def postgres_probe(
    database: PostgresDatabase,
    *,
    timeout: float,
    failure_status: HealthStatus = HealthStatus.UNHEALTHY,
) -> ProbeDescriptor:
    return ping_probe(
        POSTGRES_PROBE_NAME,
        database,
        timeout=timeout,
        tags=POSTGRES_PROBE_TAGS,
        failure_status=failure_status,
        data=database.describe(),
    )


def redis_probe(
    cache: RedisCache,
    *,
    timeout: float,
    failure_status: HealthStatus = HealthStatus.UNHEALTHY,
) -> ProbeDescriptor:
    return ping_probe(
        REDIS_PROBE_NAME,
        cache,
        timeout=timeout,
        tags=REDIS_PROBE_TAGS,
        failure_status=failure_status,
        data=cache.describe(),
    )


def build_probe_registry(
    postgres_database: PostgresDatabase,
    redis_cache: RedisCache,
    *,
    postgres_timeout: float,
    redis_timeout: float,
    postgres_failure_status: HealthStatus = HealthStatus.UNHEALTHY,
    redis_failure_status: HealthStatus = HealthStatus.UNHEALTHY,
) -> ProbeRegistry:
    """Register the datastore probe followed by the cache probe."""
    registry = ProbeRegistry()
    registry.register(
        postgres_probe(
            postgres_database,
            timeout=postgres_timeout,
            failure_status=HealthStatus(postgres_failure_status),
        )
    )
    registry.register(
        redis_probe(
            redis_cache,
            timeout=redis_timeout,
            failure_status=HealthStatus(redis_failure_status),
        )
    )
    return registry
