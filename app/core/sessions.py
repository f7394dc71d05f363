"""
Session/token verification strategies.
Challenge: Three historical ways of proving who the caller is, exactly one active per deployment.
Design: Each strategy verifies a request, issues credentials after login and revokes them on logout.
Failures always raise UnauthenticatedError (or its TokenExpiredError subclass).
"""

import logging
import time
from typing import Protocol

from jose import ExpiredSignatureError, JWTError
from redis.asyncio import Redis
from redis.exceptions import RedisError
from starlette.requests import Request
from starlette.responses import Response

from app.cache.redis_client import bind_session, lookup_session, unbind_session
from app.config import Settings
from app.core.errors import TokenExpiredError, UnauthenticatedError
from app.core.security import create_access_token, decode_access_token, new_public_id
from app.db.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

SESSION_ID_KEY = "session_id"
USER_ID_KEY = "user_id"
ISSUED_AT_KEY = "issued_at"


class SessionVerifier(Protocol):
    async def verify(self, request: Request, response: Response, users: UserRepository) -> str:
        """Public id of the caller, or UnauthenticatedError."""
        ...

    async def issue(self, request: Request, response: Response, user_id: str) -> str | None:
        """Credentials for a freshly authenticated user; returns the session id where there is one."""
        ...

    async def revoke(self, request: Request, response: Response) -> None:
        ...


class CookieSession:
    """Session id and user id live in the signed auth_session cookie (SessionMiddleware)."""

    def __init__(self, settings: Settings):
        self.max_age = settings.session_max_age

    def _session_user(self, request: Request) -> tuple[str, str]:
        session_id = request.session.get(SESSION_ID_KEY)
        if not session_id:
            raise UnauthenticatedError("session has expired or is invalid")
        user_id = request.session.get(USER_ID_KEY)
        if not user_id:
            raise UnauthenticatedError("session has no user")
        issued_at = request.session.get(ISSUED_AT_KEY, 0)
        if time.time() - issued_at > self.max_age:
            raise UnauthenticatedError("session has expired or is invalid")
        return session_id, user_id

    async def verify(self, request: Request, response: Response, users: UserRepository) -> str:
        _, user_id = self._session_user(request)
        return user_id

    async def issue(self, request: Request, response: Response, user_id: str) -> str:
        session_id = new_public_id()
        request.session[SESSION_ID_KEY] = session_id
        request.session[USER_ID_KEY] = user_id
        request.session[ISSUED_AT_KEY] = int(time.time())
        return session_id

    async def revoke(self, request: Request, response: Response) -> None:
        for key in (SESSION_ID_KEY, USER_ID_KEY, ISSUED_AT_KEY):
            request.session.pop(key, None)


class StoreBackedSession(CookieSession):
    """Cookie session cross-checked against a Redis record with the same lifetime."""

    def __init__(self, settings: Settings, redis: Redis):
        super().__init__(settings)
        self.redis = redis

    async def verify(self, request: Request, response: Response, users: UserRepository) -> str:
        session_id, user_id = self._session_user(request)
        bound_user = await lookup_session(self.redis, session_id)
        if bound_user is None:
            raise UnauthenticatedError("session has expired or is invalid")
        if bound_user != user_id:
            logger.warning("session %s bound to a different user than its cookie", session_id[:6])
            raise UnauthenticatedError("session is invalid")
        return user_id

    async def _forget(self, session_id: str) -> None:
        try:
            await unbind_session(self.redis, session_id)
        except RedisError:
            logger.exception("could not drop session record %s", session_id[:6])

    async def issue(self, request: Request, response: Response, user_id: str) -> str:
        # A re-login replaces the session; the previous record must not outlive it
        previous = request.session.get(SESSION_ID_KEY)
        if previous:
            await self._forget(previous)
        session_id = await super().issue(request, response, user_id)
        await bind_session(self.redis, session_id, user_id, self.max_age)
        return session_id

    async def revoke(self, request: Request, response: Response) -> None:
        session_id = request.session.get(SESSION_ID_KEY)
        await super().revoke(request, response)
        if session_id:
            await self._forget(session_id)


class SignedToken:
    """Self-contained JWT in an HTTP-only cookie, refreshed while the user is active."""

    def __init__(self, settings: Settings):
        self.cookie_name = settings.token_cookie_name
        self.max_age = settings.jwt_expire_minutes * 60
        self.refresh_threshold = settings.jwt_refresh_threshold_minutes * 60
        self.secure = settings.cookie_secure

    def _set_cookie(self, response: Response, token: str) -> None:
        response.set_cookie(
            self.cookie_name,
            token,
            max_age=self.max_age,
            path="/",
            httponly=True,
            secure=self.secure,
            samesite="lax",
        )

    async def verify(self, request: Request, response: Response, users: UserRepository) -> str:
        token = request.cookies.get(self.cookie_name)
        if not token:
            raise UnauthenticatedError("No authorization token cookie found")
        try:
            payload = decode_access_token(token)
        except ExpiredSignatureError:
            raise TokenExpiredError("The token has expired")
        except JWTError:
            raise UnauthenticatedError("The token is invalid")

        user_id = payload.get(USER_ID_KEY) or payload.get("sub")
        if not user_id or await users.get_by_public_id(user_id) is None:
            raise UnauthenticatedError("The token does not belong to a known user")

        if payload["exp"] - time.time() < self.refresh_threshold:
            self._set_cookie(response, create_access_token(user_id))
        return user_id

    async def issue(self, request: Request, response: Response, user_id: str) -> None:
        self._set_cookie(response, create_access_token(user_id))

    async def revoke(self, request: Request, response: Response) -> None:
        response.delete_cookie(self.cookie_name, path="/")


def build_verifier(settings: Settings, redis: Redis) -> SessionVerifier:
    """The strategy named by settings.auth_strategy."""
    if settings.auth_strategy == "token":
        return SignedToken(settings)
    if settings.auth_strategy == "cookie":
        return CookieSession(settings)
    return StoreBackedSession(settings, redis)
