"""
Auth endpoints - Google OAuth login, local registration/login, logout.
Challenge: One login flow per provider, one session issue/revoke path for all of them.
Design: Thin controller; AuthService finds or creates users, the verifier issues credentials.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import RedirectResponse

from app.config import get_settings
from app.core.dependencies import Verifier
from app.core.errors import UnauthenticatedError
from app.core.oauth import OAuthProvider, get_oauth_provider
from app.db.repositories.user_repository import UserRepository
from app.db.session import DbSession
from app.schemas.user import LoginRequest, UserCreate, UserResponse
from app.services.auth_service import AuthService, user_to_response

router = APIRouter()
logger = logging.getLogger(__name__)

Provider = Annotated[OAuthProvider, Depends(get_oauth_provider)]


def _get_auth_service(session: DbSession) -> AuthService:
    return AuthService(UserRepository(session))


def _callback_url(request: Request) -> str:
    return get_settings().oauth_callback_url or str(request.url_for("auth_callback"))


@router.get("", response_model=UserResponse)
async def begin_auth(
    request: Request,
    response: Response,
    session: DbSession,
    verifier: Verifier,
    provider: Provider,
):
    """Already signed in: return the user. Otherwise start the OAuth flow."""
    users = UserRepository(session)
    try:
        public_id = await verifier.verify(request, response, users)
    except UnauthenticatedError:
        return await provider.begin(request, _callback_url(request))
    user = await users.get_by_public_id(public_id)
    if user is None:
        return await provider.begin(request, _callback_url(request))
    return user_to_response(user)


@router.get("/callback", name="auth_callback", response_model=UserResponse)
async def auth_callback(
    request: Request,
    response: Response,
    session: DbSession,
    verifier: Verifier,
    provider: Provider,
):
    """Provider redirects here with the code; sign the user in."""
    profile = await provider.complete(request)
    user = await _get_auth_service(session).find_or_create(profile.external_id, profile.display_name)
    logger.info("oauth login: %s", user.public_id)

    redirect_url = get_settings().post_login_redirect_url
    if redirect_url:
        redirect = RedirectResponse(redirect_url, status_code=302)
        await verifier.issue(request, redirect, user.public_id)
        return redirect
    await verifier.issue(request, response, user.public_id)
    return user_to_response(user)


@router.post("/register", response_model=UserResponse)
async def register(session: DbSession, data: UserCreate):
    """Create a local-credential user. Does not sign in."""
    user = await _get_auth_service(session).register(data)
    return user_to_response(user)


@router.post("/login", response_model=UserResponse)
async def login(
    request: Request,
    response: Response,
    session: DbSession,
    verifier: Verifier,
    data: LoginRequest,
):
    """Check email and password, then issue a session (or token cookie)."""
    user = await _get_auth_service(session).authenticate(data.email, data.password)
    await verifier.issue(request, response, user.public_id)
    logger.info("password login: %s", user.public_id)
    return user_to_response(user)


@router.get("/logout", response_class=Response)
async def logout(request: Request, response: Response, verifier: Verifier):
    """Revoke whatever session the caller holds. Succeeds without one."""
    await verifier.revoke(request, response)
