"""Tests for sign-in, sign-out and the current-user endpoint."""

import pytest
from httpx import AsyncClient

from tests.conftest import ADMIN_HEADERS, ADMIN_TOKEN, VIEWER_HEADERS


@pytest.mark.asyncio
async def test_login(async_client: AsyncClient):
    resp = await async_client.post("/api/v1/auth/login", json={
        "email": "admin@example.com",
        "password": "admin-password",
    })
    assert resp.status_code == 200
    data = resp.json()
    assert data["token_type"] == "bearer"
    assert data["email"] == "admin@example.com"

    # The issued token works against protected endpoints
    resp = await async_client.get(
        "/api/v1/auth/me", headers={"Authorization": f"Bearer {data['access_token']}"}
    )
    assert resp.status_code == 200
    assert resp.json()["is_admin"] is True


@pytest.mark.asyncio
async def test_login_bad_password(async_client: AsyncClient):
    resp = await async_client.post("/api/v1/auth/login", json={
        "email": "admin@example.com",
        "password": "wrong",
    })
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid email or password"


@pytest.mark.asyncio
async def test_me_reports_roles(async_client: AsyncClient):
    resp = await async_client.get("/api/v1/auth/me", headers=VIEWER_HEADERS)
    assert resp.status_code == 200
    data = resp.json()
    assert data["email"] == "viewer@example.com"
    assert data["roles"] == ["viewer"]
    assert data["is_admin"] is False


@pytest.mark.asyncio
async def test_token_lookup_is_cached(async_client: AsyncClient, fake_supabase):
    await async_client.get("/api/v1/auth/me", headers=ADMIN_HEADERS)
    await async_client.get("/api/v1/auth/me", headers=ADMIN_HEADERS)
    assert fake_supabase.auth.get_user_calls == 1


@pytest.mark.asyncio
async def test_logout_revokes_session(async_client: AsyncClient, fake_supabase):
    resp = await async_client.post("/api/v1/auth/logout", headers=ADMIN_HEADERS)
    assert resp.status_code == 200
    assert fake_supabase.auth.admin.signed_out == [ADMIN_TOKEN]


@pytest.mark.asyncio
async def test_wrong_auth_scheme(async_client: AsyncClient):
    resp = await async_client.get("/api/v1/auth/me", headers={"Authorization": "Basic abc"})
    assert resp.status_code == 401


def test_expired_cache_entry_removed_concurrently(fake_supabase, monkeypatch):
    """Another request evicting the same expired entry must not fail this lookup."""
    from taplist.modules.auth import service as auth_service

    class EvictingCache(dict):
        def __getitem__(self, key):
            value = super().__getitem__(key)
            super().pop(key)
            return value

    cache = EvictingCache()
    cache[auth_service._cache_key(ADMIN_TOKEN)] = ({"id": "stale"}, 0.0)
    monkeypatch.setattr(auth_service, "_AUTH_USER_CACHE", cache)

    user = auth_service.AuthService(fake_supabase).get_current_user(ADMIN_TOKEN)
    assert user["email"] == "admin@example.com"
    assert fake_supabase.auth.get_user_calls == 1
