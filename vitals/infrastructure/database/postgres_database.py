"""
PostgreSQL Database - Infrastructure Layer

This module owns the asynchronous SQLAlchemy engine used to reach the
relational datastore. The health-check engine only borrows it for a
``SELECT 1`` round-trip.
"""

from typing import Any, Dict

from sqlalchemy import text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

ASYNC_DRIVER = "postgresql+asyncpg"


def to_async_url(dsn: str) -> URL:
    """Parse a PostgreSQL DSN, forcing the asyncpg driver.

    ``postgres://`` and ``postgresql://`` URLs are accepted as given by most
    hosting providers.
    """
    url = make_url(dsn)
    if url.drivername in ("postgres", "postgresql"):
        url = url.set(drivername=ASYNC_DRIVER)
    return url


class PostgresDatabase:
    """PostgreSQL client backed by a pooled SQLAlchemy async engine."""

    def __init__(
        self,
        dsn: str,
        pool_size: int = 5,
        connect_timeout: float = 5.0,
        echo: bool = False,
    ):
        """
        Initialize the PostgreSQL client.

        The engine connects lazily, so constructing the client never touches
        the network.

        Args:
            dsn: PostgreSQL connection URL
            pool_size: Number of pooled connections
            connect_timeout: Seconds allowed to open a new connection
            echo: Log emitted SQL statements
        """
        self.url: URL = to_async_url(dsn)
        self.engine: AsyncEngine = create_async_engine(
            self.url,
            pool_size=pool_size,
            max_overflow=pool_size,
            pool_recycle=1800,
            pool_pre_ping=True,
            connect_args={"timeout": connect_timeout},
            echo=echo,
        )

    @property
    def safe_url(self) -> str:
        """Connection URL with the password masked."""
        return self.url.render_as_string(hide_password=True)

    def describe(self) -> Dict[str, Any]:
        """Diagnostic key/values reported alongside the probe outcome."""
        return {
            "host": self.url.host or "",
            "port": self.url.port or 5432,
            "database": self.url.database or "",
        }

    async def ping(self) -> None:
        """Run ``SELECT 1`` on a pooled connection.

        Raises:
            Exception: Any driver error when the server cannot be reached
                or the query fails.
        """
        async with self.engine.connect() as connection:
            await connection.execute(text("SELECT 1"))

    async def close(self) -> None:
        """Dispose of the connection pool."""
        await self.engine.dispose()
