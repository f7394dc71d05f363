"""
Redis client - server-side session records (session id -> user public id, with TTL).
Challenge: Connection pooling, fail closed when Redis is down.
Design: Single client instance, dependency injection for testability.
"""

import logging

from redis.asyncio import Redis
from redis.exceptions import RedisError

from app.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

SESSION_PREFIX = "session:"

# Shared async Redis client (connection pool managed by redis-py)
_redis: Redis | None = None


async def get_redis() -> Redis:
    """Get Redis connection. Used as FastAPI dependency."""
    global _redis
    if _redis is None:
        _redis = Redis.from_url(
            settings.redis_url,
            encoding="utf-8",
            decode_responses=True,
        )
    return _redis


async def close_redis() -> None:
    global _redis
    if _redis is not None:
        await _redis.aclose()
        _redis = None


async def bind_session(client: Redis, session_id: str, user_id: str, ttl_seconds: int) -> None:
    """Record which user a session belongs to. Errors propagate: login must not half-succeed."""
    await client.setex(SESSION_PREFIX + session_id, ttl_seconds, user_id)


async def lookup_session(client: Redis, session_id: str) -> str | None:
    """User bound to the session, or None if missing, expired or Redis is unreachable."""
    try:
        return await client.get(SESSION_PREFIX + session_id)
    except RedisError as e:
        logger.warning("session lookup failed: %s", e)
        return None


async def unbind_session(client: Redis, session_id: str) -> None:
    await client.delete(SESSION_PREFIX + session_id)
