"""
Database package - Infrastructure Layer

Client for the relational datastore whose liveness the service reports.
"""

from vitals.infrastructure.database.postgres_database import (
    PostgresDatabase,
    to_async_url,
)

__all__ = ["PostgresDatabase", "to_async_url"]
