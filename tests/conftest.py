"""
Shared test fixtures for the taplist API test suite.

The Supabase client is swapped for an in-memory fake through FastAPI
dependency overrides; nothing talks to a real project.
"""

import os
from typing import AsyncGenerator

import pytest

# Override environment BEFORE importing application modules
os.environ["SUPABASE_URL"] = "https://fake.supabase.co"
os.environ["SUPABASE_KEY"] = "anon-key"
os.environ["SUPABASE_SERVICE_ROLE_KEY"] = "service-role-key"
os.environ["SITE_URL"] = "https://taplist.example.com"
os.environ["TAP_COUNT"] = "4"
os.environ["RATE_LIMIT"] = "1000/minute"

from httpx import ASGITransport, AsyncClient

from taplist.core.rate_limit import limiter
from taplist.core.realtime import ChangeFeed, get_change_feed
from taplist.database.supabase_client import get_auth_client, get_supabase
from taplist.main import app
from taplist.modules.auth.service import clear_auth_cache
from tests.fakes import FakeSupabase

ADMIN_TOKEN = "admin-token"
VIEWER_TOKEN = "viewer-token"
ADMIN_HEADERS = {"Authorization": f"Bearer {ADMIN_TOKEN}"}
VIEWER_HEADERS = {"Authorization": f"Bearer {VIEWER_TOKEN}"}


@pytest.fixture
def fake_supabase() -> FakeSupabase:
    """Fake project with one admin and one viewer account."""
    fake = FakeSupabase()
    admin = fake.auth.add_user("admin@example.com", "admin-password", token=ADMIN_TOKEN)
    viewer = fake.auth.add_user("viewer@example.com", "viewer-password", token=VIEWER_TOKEN)
    fake.tables["user_roles"].extend([
        {"id": "role-1", "user_id": admin.id, "role": "admin"},
        {"id": "role-2", "user_id": viewer.id, "role": "viewer"},
    ])
    fake.tables["taps"].extend([
        {"id": tap_id, "beverage_id": None, "is_active": False, "updated_at": None}
        for tap_id in range(1, 5)
    ])
    return fake


@pytest.fixture
def feed() -> ChangeFeed:
    return ChangeFeed(queue_size=10)


@pytest.fixture(autouse=True)
def override_dependencies(fake_supabase: FakeSupabase, feed: ChangeFeed):
    clear_auth_cache()
    limiter.reset()
    app.dependency_overrides[get_supabase] = lambda: fake_supabase
    app.dependency_overrides[get_auth_client] = lambda: fake_supabase
    app.dependency_overrides[get_change_feed] = lambda: feed
    yield
    app.dependency_overrides.clear()
    clear_auth_cache()


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """Return a httpx AsyncClient wired to the app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def beverage_row(fake_supabase: FakeSupabase):
    """Insert a beverage straight into the fake table and return it."""
    def _make(**fields):
        row = {
            "id": fields.pop("id", None) or f"bev-{len(fake_supabase.tables['beverages']) + 1}",
            "name": "Hazy Daze",
            "type": "beer",
            "brewery": "Two Rotten Brewing",
            "abv": 6.5,
            "style": "NEIPA",
            "description": None,
            "label": None,
            "created_at": "2026-01-01T00:00:00+00:00",
        }
        row.update(fields)
        fake_supabase.tables["beverages"].append(row)
        return row
    return _make
