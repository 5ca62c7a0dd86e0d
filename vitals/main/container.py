"""
Dependency container injection module - Main Layer

This module implements the dependency injection container
to simplify the management and lifecycle of dependencies
in the application.
"""

from contextlib import asynccontextmanager

from dependency_injector import containers, providers

from vitals.application.models import SystemInfo
from vitals.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetHealthStatusUseCase,
)
from vitals.domain.services.aggregation_engine import AggregationEngine
from vitals.infrastructure.cache import RedisCache
from vitals.infrastructure.database import PostgresDatabase
from vitals.infrastructure.services.dependency_probes import build_probe_registry
from vitals.infrastructure.services.health_check_service import HealthCheckService
from vitals.shared import get_logger

from .config import AppSettings

logger = get_logger(__name__)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependency-injector."""

    wiring_config = containers.WiringConfiguration(
        packages=["..presentation", "..application"]
    )

    # Settings
    config = providers.Configuration()

    # Infrastructure
    postgres_database = providers.Singleton(
        PostgresDatabase,
        dsn=config.database.postgres_dsn,
        pool_size=config.database.pool_size,
        connect_timeout=config.database.connect_timeout,
        echo=config.app.debug,
    )

    redis_cache = providers.Singleton(
        RedisCache,
        redis_url=config.redis.url,
        socket_timeout=config.redis.socket_timeout,
    )

    # Probes are registered once; a duplicate name fails container resolution
    probe_registry = providers.Singleton(
        build_probe_registry,
        postgres_database=postgres_database,
        redis_cache=redis_cache,
        postgres_timeout=config.health.postgres_timeout,
        redis_timeout=config.health.redis_timeout,
        postgres_failure_status=config.health.postgres_failure_status,
        redis_failure_status=config.health.redis_failure_status,
    )

    aggregation_engine = providers.Singleton(AggregationEngine)

    health_check_service = providers.Singleton(
        HealthCheckService,
        registry=probe_registry,
        engine=aggregation_engine,
        default_deadline=config.health.request_deadline,
    )

    system_info = providers.Singleton(
        SystemInfo,
        title=config.app.title,
        description=config.app.description,
        version=config.app.version,
        environment=providers.Callable(
            lambda env: env.value if hasattr(env, "value") else str(env),
            config.environment,
        ),
        git_commit=config.app.git_commit,
        build_time=config.app.build_time,
        postgres_dsn=config.database.postgres_dsn,
        redis_url=config.redis.url,
    )

    # Application (use cases)
    get_health_status_use_case = providers.Factory(
        GetHealthStatusUseCase,
        health_check_service=health_check_service,
    )

    get_application_info_use_case = providers.Factory(
        GetApplicationInfoUseCase,
        health_check_service=health_check_service,
        system_info=system_info,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@asynccontextmanager
async def app_lifespan():
    """
    Lifecycle of the dependency clients borrowed by the probes.

    The probe registry is built eagerly so a misconfigured probe set stops
    the service before it serves traffic; client pools are disposed on
    shutdown.
    """
    container = get_container()

    postgres_database = container.postgres_database()
    redis_cache = container.redis_cache()
    registry = container.probe_registry()
    logger.info(
        "container.probes.registered",
        probes=list(registry.names()),
        postgres=postgres_database.safe_url,
    )

    try:
        yield container
    finally:
        logger.info("container.postgres.close")
        await postgres_database.close()
        logger.info("container.redis.close")
        await redis_cache.close()
        logger.info("container.resources.shutdown")
