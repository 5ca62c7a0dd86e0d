"""Cache clients - Infrastructure Layer."""

from vitals.infrastructure.cache.redis_cache import RedisCache

__all__ = ["RedisCache"]
