"""
Process-wide Redis client.

One ConnectionPool and one client are shared by every request; the
recommendation cache resolves the client through ``get_redis`` on each call
so tests can swap it for fakeredis.
"""

import logging
from typing import Optional

from redis.asyncio import Redis, ConnectionPool

from app.core.config import settings

logger = logging.getLogger(__name__)

_pool: Optional[ConnectionPool] = None
_client: Optional[Redis] = None


async def get_redis_pool() -> ConnectionPool:
    global _pool
    if _pool is None:
        _pool = ConnectionPool.from_url(
            settings.redis_url,
            max_connections=settings.redis_pool_size,
            socket_timeout=settings.redis_socket_timeout,
            socket_connect_timeout=settings.redis_socket_timeout,
            health_check_interval=30,
            decode_responses=True,
        )
        logger.info("Redis connection pool created: %s", settings.redis_url)
    return _pool


async def get_redis() -> Redis:
    """Shared client bound to the process pool."""
    global _client
    if _client is None:
        _client = Redis(connection_pool=await get_redis_pool())
    return _client


async def close_redis_pool() -> None:
    global _pool, _client
    if _client is not None:
        await _client.aclose()
        _client = None
    if _pool is not None:
        await _pool.aclose()
        _pool = None
        logger.info("Redis connection pool closed")
