"""
FastAPI dependencies - injection for DB, Redis, auth (SOLID: Dependency Inversion).
Challenge: Reusable auth gate shared by REST and GraphQL, consistent error responses.
"""

import logging
from typing import Annotated

from fastapi import Depends, Request, Response
from redis.asyncio import Redis

from app.cache.redis_client import get_redis
from app.config import get_settings
from app.core.errors import UnauthenticatedError
from app.core.sessions import SessionVerifier, build_verifier
from app.db.repositories.user_repository import UserRepository
from app.db.session import DbSession

logger = logging.getLogger(__name__)


def get_session_verifier(redis: Annotated[Redis, Depends(get_redis)]) -> SessionVerifier:
    """The configured verifier strategy."""
    return build_verifier(get_settings(), redis)


Verifier = Annotated[SessionVerifier, Depends(get_session_verifier)]


async def get_current_user_public_id(
    request: Request,
    response: Response,
    session: DbSession,
    verifier: Verifier,
) -> str:
    """Verify the caller's session or token. Raises 401 if missing or invalid."""
    try:
        user_id = await verifier.verify(request, response, UserRepository(session))
    except UnauthenticatedError as e:
        logger.warning("rejected %s %s: %s", request.method, request.url.path, e.message)
        raise
    request.state.user_id = user_id
    return user_id


CurrentUserPublicId = Annotated[str, Depends(get_current_user_public_id)]


async def get_current_user_id(session: DbSession, public_id: CurrentUserPublicId) -> int:
    """Resolve the verified public id to the internal id used by owner filters."""
    return await UserRepository(session).private_id(public_id)


CurrentUserId = Annotated[int, Depends(get_current_user_id)]
