"""
OAuth client - Google OpenID Connect through Authlib's Starlette integration.
Challenge: The provider is an external collaborator; tests swap it out.
Design: OAuthProvider wraps the Authlib client behind begin/complete so the handler
never sees tokens, and provider failures surface as ProviderError.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache

import httpx
from authlib.integrations.starlette_client import OAuth, OAuthError
from starlette.requests import Request
from starlette.responses import Response

from app.config import Settings, get_settings
from app.core.errors import ProviderError

logger = logging.getLogger(__name__)

GOOGLE_METADATA_URL = "https://accounts.google.com/.well-known/openid-configuration"


@dataclass
class ProviderUser:
    external_id: str
    display_name: str


class OAuthProvider:
    def __init__(self, settings: Settings):
        self.oauth = OAuth()
        self.oauth.register(
            name="google",
            client_id=settings.google_client_id,
            client_secret=settings.google_client_secret,
            server_metadata_url=GOOGLE_METADATA_URL,
            client_kwargs={"scope": "openid email profile"},
        )
        self.client = self.oauth.create_client("google")

    async def begin(self, request: Request, redirect_uri: str) -> Response:
        """Redirect to the provider; Authlib keeps the state in request.session."""
        try:
            return await self.client.authorize_redirect(request, redirect_uri)
        except (OAuthError, httpx.HTTPError) as e:
            logger.exception("oauth redirect failed")
            raise ProviderError(f"identity provider unavailable: {e}")

    async def complete(self, request: Request) -> ProviderUser:
        """Exchange the callback code and read the user's profile."""
        try:
            token = await self.client.authorize_access_token(request)
            userinfo = token.get("userinfo") or await self.client.userinfo(token=token)
        except (OAuthError, httpx.HTTPError) as e:
            logger.exception("oauth code exchange failed")
            raise ProviderError(f"identity provider error: {e}")

        subject = userinfo.get("sub")
        if not subject:
            raise ProviderError("identity provider returned no subject")
        display_name = userinfo.get("name") or userinfo.get("email") or subject
        return ProviderUser(external_id=subject, display_name=display_name)


@lru_cache
def get_oauth_provider() -> OAuthProvider:
    """Process-wide provider client. Used as FastAPI dependency (overridden in tests)."""
    return OAuthProvider(get_settings())
