"""
Auth API tests - registration, password login, logout and the OAuth callback.
"""

import pytest
import pytest_asyncio
from fastapi.responses import RedirectResponse
from httpx import ASGITransport, AsyncClient
from sqlalchemy import delete, func, select

from app.config import get_settings
from app.core.dependencies import get_session_verifier
from app.core.errors import ProviderError
from app.core.oauth import ProviderUser, get_oauth_provider
from app.core.sessions import CookieSession, SignedToken
from app.db.models import User
from app.main import app

PROVIDER_URL = "https://accounts.example.com/authorize"


class FakeProvider:
    """Stands in for Google: begin redirects, complete returns a fixed profile."""

    def __init__(self, profile: ProviderUser | None = None, error: Exception | None = None):
        self.profile = profile
        self.error = error

    async def begin(self, request, redirect_uri):
        return RedirectResponse(f"{PROVIDER_URL}?redirect_uri={redirect_uri}", status_code=302)

    async def complete(self, request):
        if self.error:
            raise self.error
        return self.profile


@pytest_asyncio.fixture
async def provider(overrides):
    fake = FakeProvider(ProviderUser(external_id="google-oauth2|1234", display_name="Ada Lovelace"))
    overrides[get_oauth_provider] = lambda: fake
    return fake


async def _user_count(session) -> int:
    return (await session.execute(select(func.count()).select_from(User))).scalar_one()


@pytest.mark.asyncio
async def test_register_returns_public_user(client: AsyncClient):
    response = await client.post(
        "/auth/register",
        json={"email": "new@example.com", "password": "secret-pass", "displayName": "New User"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["email"] == "new@example.com"
    assert data["displayName"] == "New User"
    assert len(data["id"]) == 21
    assert "password" not in str(data).lower()


@pytest.mark.asyncio
async def test_register_duplicate_email_conflicts(client: AsyncClient):
    body = {"email": "dup@example.com", "password": "secret-pass"}
    assert (await client.post("/auth/register", json=body)).status_code == 200
    response = await client.post("/auth/register", json=body)
    assert response.status_code == 409
    assert response.json()["detail"] == "Email already registered"


@pytest.mark.asyncio
async def test_register_rejects_invalid_email(client: AsyncClient):
    response = await client.post("/auth/register", json={"email": "not-an-email", "password": "x"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_login_wrong_password(client: AsyncClient):
    await client.post("/auth/register", json={"email": "carol@example.com", "password": "right-pass"})
    response = await client.post("/auth/login", json={"email": "carol@example.com", "password": "wrong-pass"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid email or password"


@pytest.mark.asyncio
async def test_protected_route_requires_session(client: AsyncClient):
    response = await client.get("/locations")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_login_sets_session_cookie(alice: AsyncClient):
    assert alice.cookies.get("auth_session")
    response = await alice.get("/locations")
    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_logout_invalidates_session(alice: AsyncClient):
    response = await alice.get("/auth/logout")
    assert response.status_code == 200
    assert (await alice.get("/locations")).status_code == 401


@pytest.mark.asyncio
async def test_logout_without_session_is_ok(client: AsyncClient):
    assert (await client.get("/auth/logout")).status_code == 200
    assert (await client.get("/auth/logout")).status_code == 200


@pytest.mark.asyncio
async def test_replayed_cookie_after_logout_rejected(alice: AsyncClient):
    """The Redis record is gone, so an old copy of the cookie no longer works."""
    old_cookie = alice.cookies.get("auth_session")
    await alice.get("/auth/logout")
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as replay:
        replay.cookies.set("auth_session", old_cookie)
        response = await replay.get("/locations")
    assert response.status_code == 401
    assert response.json()["detail"] == "session has expired or is invalid"


@pytest.mark.asyncio
async def test_expired_store_record_rejected(alice: AsyncClient, redis):
    for key in await redis.keys("session:*"):
        await redis.delete(key)
    response = await alice.get("/items")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_auth_redirects_to_provider(client: AsyncClient, provider):
    response = await client.get("/auth")
    assert response.status_code == 302
    assert response.headers["location"].startswith(PROVIDER_URL)
    assert "auth/callback" in response.headers["location"]


@pytest.mark.asyncio
async def test_auth_returns_user_when_signed_in(alice: AsyncClient, provider):
    response = await alice.get("/auth")
    assert response.status_code == 200
    assert response.json()["id"] == alice.user["id"]


@pytest.mark.asyncio
async def test_callback_creates_user_once(client: AsyncClient, provider, session):
    first = await client.get("/auth/callback", params={"code": "abc", "state": "xyz"})
    assert first.status_code == 200
    assert first.json()["displayName"] == "Ada Lovelace"

    second = await client.get("/auth/callback", params={"code": "def", "state": "uvw"})
    assert second.json()["id"] == first.json()["id"]
    assert await _user_count(session) == 1

    # Signed in by the callback
    assert (await client.get("/receipts")).status_code == 200


@pytest.mark.asyncio
async def test_callback_redirects_when_configured(client: AsyncClient, provider, monkeypatch):
    monkeypatch.setattr(get_settings(), "post_login_redirect_url", "http://localhost:3000/")
    response = await client.get("/auth/callback", params={"code": "abc"})
    assert response.status_code == 302
    assert response.headers["location"] == "http://localhost:3000/"
    assert (await client.get("/locations")).status_code == 200


@pytest.mark.asyncio
async def test_callback_provider_failure(client: AsyncClient, provider, session):
    provider.error = ProviderError("identity provider error: invalid_grant")
    response = await client.get("/auth/callback", params={"code": "bad"})
    assert response.status_code == 502
    assert await _user_count(session) == 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "verifier_cls, cookie_name",
    [(SignedToken, "token"), (CookieSession, "auth_session")],
)
async def test_other_strategies_end_to_end(overrides, verifier_cls, cookie_name):
    overrides[get_session_verifier] = lambda: verifier_cls(get_settings())
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        await c.post("/auth/register", json={"email": "dave@example.com", "password": "secret-pass"})
        response = await c.post("/auth/login", json={"email": "dave@example.com", "password": "secret-pass"})
        assert response.status_code == 200
        assert c.cookies.get(cookie_name)
        assert (await c.get("/locations")).status_code == 200

        assert (await c.get("/auth/logout")).status_code == 200
        assert (await c.get("/locations")).status_code == 401


@pytest.mark.asyncio
async def test_session_replaced_by_relogin_dies_with_logout(alice: AsyncClient):
    first_cookie = alice.cookies.get("auth_session")
    response = await alice.post("/auth/login", json={"email": "alice@example.com", "password": "password123"})
    assert response.status_code == 200
    assert (await alice.get("/auth/logout")).status_code == 200

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as replay:
        replay.cookies.set("auth_session", first_cookie)
        response = await replay.get("/locations")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_relogin_leaves_one_session_record(alice: AsyncClient, redis):
    await alice.post("/auth/login", json={"email": "alice@example.com", "password": "password123"})
    assert len(await redis.keys("session:*")) == 1


@pytest.mark.asyncio
async def test_session_of_deleted_user_is_not_found(alice: AsyncClient, session):
    await session.execute(delete(User).where(User.public_id == alice.user["id"]))
    await session.commit()

    response = await alice.get("/locations")
    assert response.status_code == 404
    assert response.json() == {"detail": f"user {alice.user['id']!r} not found"}
