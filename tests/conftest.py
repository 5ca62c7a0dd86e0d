from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from vitals.domain.entities.health import (  # noqa: E402
    CheckResult,
    HealthStatus,
    ProbeDescriptor,
)
from vitals.domain.services.probe_registry import ProbeRegistry  # noqa: E402


class StubPinger:
    """Pinger double: optional delay, then success or the configured error."""

    def __init__(
        self, error: Optional[BaseException] = None, delay: float = 0.0
    ) -> None:
        self.error = error
        self.delay = delay
        self.calls = 0

    async def ping(self) -> None:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error


def static_check(
    status: HealthStatus = HealthStatus.HEALTHY,
    *,
    description: Optional[str] = None,
    data: Optional[Dict[str, Any]] = None,
    delay: float = 0.0,
    calls: Optional[List[str]] = None,
    name: str = "",
):
    async def check() -> CheckResult:
        if calls is not None:
            calls.append(f"start:{name}")
        if delay:
            await asyncio.sleep(delay)
        if calls is not None:
            calls.append(f"end:{name}")
        return CheckResult(status=status, description=description, data=data or {})

    return check


def raising_check(error: BaseException, delay: float = 0.0):
    async def check() -> CheckResult:
        if delay:
            await asyncio.sleep(delay)
        raise error

    return check


def make_probe(
    name: str,
    status: HealthStatus = HealthStatus.HEALTHY,
    *,
    timeout: float = 1.0,
    tags: Iterable[str] = (),
    **kwargs: Any,
) -> ProbeDescriptor:
    return ProbeDescriptor(
        name=name,
        check=static_check(status, name=name, **kwargs),
        timeout=timeout,
        tags=frozenset(tags),
    )


@pytest.fixture()
def stub_pinger() -> StubPinger:
    return StubPinger()


@pytest.fixture()
def scenario_registry() -> ProbeRegistry:
    """PostgreSQL healthy after 5ms, Redis refusing connections after 2ms."""
    return ProbeRegistry(
        [
            make_probe(
                "postgresql",
                HealthStatus.HEALTHY,
                delay=0.005,
                tags=("db", "sql", "postgresql"),
            ),
            make_probe(
                "redis",
                HealthStatus.UNHEALTHY,
                description="connection refused",
                delay=0.002,
                tags=("cache", "redis"),
            ),
        ]
    )
