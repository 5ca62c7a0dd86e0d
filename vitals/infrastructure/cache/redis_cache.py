"""Redis cache client used for liveness probing."""

from __future__ import annotations

from typing import Any, Dict

import redis.asyncio as aioredis


class RedisCache:
    """Thin wrapper over a pooled ``redis.asyncio`` client."""

    def __init__(self, redis_url: str, *, socket_timeout: float = 5.0) -> None:
        self.client: aioredis.Redis = aioredis.from_url(
            redis_url,
            socket_connect_timeout=socket_timeout,
            socket_timeout=socket_timeout,
        )

    def describe(self) -> Dict[str, Any]:
        kwargs = self.client.connection_pool.connection_kwargs
        return {
            "host": kwargs.get("host", ""),
            "port": kwargs.get("port", 6379),
            "db": kwargs.get("db", 0),
        }

    async def ping(self) -> None:
        pong = await self.client.ping()
        if not pong:
            raise ConnectionError("Redis did not acknowledge PING")

    async def close(self) -> None:
        await self.client.aclose()
