"""Use cases for the health and application info endpoints."""

from datetime import datetime, timezone
from typing import Dict, Iterable, Optional
from urllib.parse import urlsplit, urlunsplit

from vitals.application.dtos.health_dto import ApplicationInfoDTO
from vitals.application.models import SystemInfo
from vitals.domain.entities.health import AggregateResult, ApplicationInfo
from vitals.domain.ports.health_check import IHealthCheckService


def redact_credentials(url: str) -> str:
    """Strip the user and password from a connection URL, keeping host and path."""
    if not url:
        return url

    try:
        parts = urlsplit(url)
    except ValueError:
        return "<redacted>"
    userinfo, _, hostport = parts.netloc.rpartition("@")
    if not userinfo:
        return url
    return urlunsplit(parts._replace(netloc=hostport))


class GetHealthStatusUseCase:
    """Run the registered dependency probes, optionally narrowed by tag."""

    def __init__(self, health_check_service: IHealthCheckService) -> None:
        self._health_check_service = health_check_service

    async def execute(
        self,
        tags: Optional[Iterable[str]] = None,
        deadline: Optional[float] = None,
    ) -> AggregateResult:
        return await self._health_check_service.evaluate(tags=tags, deadline=deadline)


class GetApplicationInfoUseCase:
    """Describe the running service together with a fresh health run."""

    def __init__(
        self,
        health_check_service: IHealthCheckService,
        system_info: SystemInfo,
    ) -> None:
        self._health_check_service = health_check_service
        self._info = system_info

    def _dependency_targets(self) -> Dict[str, str]:
        return {
            "postgresql": redact_credentials(self._info.postgres_dsn),
            "redis": redact_credentials(self._info.redis_url),
        }

    async def execute(self, started_at: Optional[datetime]) -> ApplicationInfoDTO:
        result = await self._health_check_service.evaluate()

        now = datetime.now(timezone.utc)
        started = started_at or now

        info = ApplicationInfo(
            name=self._info.title,
            description=self._info.description,
            version=self._info.version,
            environment=self._info.environment,
            git_commit=self._info.git_commit,
            build_time=self._info.build_time,
            started_at=started,
            uptime_seconds=max(0.0, (now - started).total_seconds()),
            status=result.status,
            entries=result.entries,
            extras={
                "environment": self._info.environment,
                "dependencies": self._dependency_targets(),
            },
        )

        return ApplicationInfoDTO.from_domain(info)
