"""Redis async connection pools."""

import redis.asyncio as aioredis


def create_pool(url: str) -> aioredis.ConnectionPool:
    """Pool for *url*; the app owns one and disconnects it on shutdown."""
    return aioredis.ConnectionPool.from_url(url, decode_responses=True)


def get_redis(pool: aioredis.ConnectionPool) -> aioredis.Redis:
    """Return a Redis client backed by *pool*."""
    return aioredis.Redis(connection_pool=pool)
