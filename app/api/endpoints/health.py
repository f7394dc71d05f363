"""
Health checks - for load balancers, Kubernetes, and monitoring.
Challenge: Fast liveness; readiness checks the relational store and Redis.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from redis.asyncio import Redis
from redis.exceptions import RedisError
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.cache.redis_client import get_redis
from app.config import get_settings
from app.db.session import DbSession

router = APIRouter()
settings = get_settings()
logger = logging.getLogger(__name__)


@router.get("")
async def health():
    """Liveness: is the process up?"""
    return {"status": "ok", "app": settings.app_name}


@router.get("/ready")
async def ready(session: DbSession, redis: Redis = Depends(get_redis)):
    """Readiness: can accept traffic? 503 until the database (and Redis, when sessions use it) answer."""
    checks = {}
    try:
        await session.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except SQLAlchemyError as e:
        logger.warning("database not ready: %s", e)
        checks["database"] = "unavailable"
    if settings.auth_strategy == "store":
        try:
            await redis.ping()
            checks["redis"] = "ok"
        except RedisError as e:
            logger.warning("redis not ready: %s", e)
            checks["redis"] = "unavailable"

    if all(v == "ok" for v in checks.values()):
        return {"status": "ready", "checks": checks}
    return JSONResponse(status_code=503, content={"status": "unavailable", "checks": checks})
