"""Tests for tap assignment endpoints."""

import pytest
from httpx import AsyncClient

from tests.conftest import ADMIN_HEADERS, VIEWER_HEADERS


@pytest.mark.asyncio
async def test_list_taps_is_public(async_client: AsyncClient, fake_supabase, beverage_row):
    """GET /taps needs no token and embeds the assigned beverage."""
    row = beverage_row()
    fake_supabase.tables["taps"][0].update({"beverage_id": row["id"], "is_active": True})

    resp = await async_client.get("/api/v1/taps")
    assert resp.status_code == 200
    taps = resp.json()
    assert [t["id"] for t in taps] == [1, 2, 3, 4]
    assert taps[0]["is_active"] is True
    assert taps[0]["beverage"]["name"] == "Hazy Daze"
    assert taps[1]["beverage"] is None


@pytest.mark.asyncio
async def test_list_taps_fills_missing_rows(async_client: AsyncClient, fake_supabase):
    fake_supabase.tables["taps"] = [{"id": 3, "beverage_id": None, "is_active": False}]
    resp = await async_client.get("/api/v1/taps")
    assert [t["id"] for t in resp.json()] == [1, 2, 3, 4]
    assert all(t["is_active"] is False for t in resp.json())


@pytest.mark.asyncio
async def test_assign_beverage_to_tap(async_client: AsyncClient, fake_supabase, beverage_row):
    """Assigning a beverage to tap 2 sets is_active=true and beverage_id=<id>."""
    row = beverage_row()
    resp = await async_client.put("/api/v1/taps/2", headers=ADMIN_HEADERS, json={"beverage_id": row["id"]})
    assert resp.status_code == 200
    data = resp.json()
    assert data["id"] == 2
    assert data["is_active"] is True
    assert data["beverage_id"] == row["id"]
    assert data["beverage"]["id"] == row["id"]

    stored = next(t for t in fake_supabase.tables["taps"] if t["id"] == 2)
    assert stored["is_active"] is True
    assert stored["beverage_id"] == row["id"]


@pytest.mark.asyncio
async def test_clear_tap(async_client: AsyncClient, fake_supabase, beverage_row):
    """Setting a null beverage empties the tap and clears is_active."""
    row = beverage_row()
    fake_supabase.tables["taps"][1].update({"beverage_id": row["id"], "is_active": True})

    resp = await async_client.put("/api/v1/taps/2", headers=ADMIN_HEADERS, json={"beverage_id": None})
    assert resp.status_code == 200
    assert resp.json()["is_active"] is False
    assert resp.json()["beverage_id"] is None

    fake_supabase.tables["taps"][1].update({"beverage_id": row["id"], "is_active": True})
    resp = await async_client.delete("/api/v1/taps/2/beverage", headers=ADMIN_HEADERS)
    assert resp.status_code == 200
    stored = fake_supabase.tables["taps"][1]
    assert stored["beverage_id"] is None
    assert stored["is_active"] is False


@pytest.mark.asyncio
async def test_assign_creates_missing_tap_row(async_client: AsyncClient, fake_supabase, beverage_row):
    row = beverage_row()
    fake_supabase.tables["taps"] = []
    resp = await async_client.put("/api/v1/taps/4", headers=ADMIN_HEADERS, json={"beverage_id": row["id"]})
    assert resp.status_code == 200
    assert len(fake_supabase.tables["taps"]) == 1
    stored = fake_supabase.tables["taps"][0]
    assert stored["id"] == 4
    assert stored["beverage_id"] == row["id"]
    assert stored["is_active"] is True


@pytest.mark.asyncio
@pytest.mark.parametrize("tap_id", [0, 5])
async def test_unknown_tap(async_client: AsyncClient, tap_id):
    resp = await async_client.put(f"/api/v1/taps/{tap_id}", headers=ADMIN_HEADERS, json={"beverage_id": None})
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Tap not found"


@pytest.mark.asyncio
async def test_assign_unknown_beverage(async_client: AsyncClient, fake_supabase):
    resp = await async_client.put("/api/v1/taps/1", headers=ADMIN_HEADERS, json={"beverage_id": "nope"})
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Beverage not found"
    assert fake_supabase.tables["taps"][0]["beverage_id"] is None


@pytest.mark.asyncio
async def test_viewer_cannot_assign(async_client: AsyncClient, beverage_row):
    row = beverage_row()
    resp = await async_client.put("/api/v1/taps/1", headers=VIEWER_HEADERS, json={"beverage_id": row["id"]})
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_assignment_is_published(async_client: AsyncClient, feed, beverage_row):
    """Display clients subscribed to the feed see the tap change."""
    row = beverage_row()
    queue = feed.subscribe()
    await async_client.put("/api/v1/taps/3", headers=ADMIN_HEADERS, json={"beverage_id": row["id"]})
    event = queue.get_nowait()
    assert event["table"] == "taps"
    assert event["type"] == "UPDATE"
    assert event["record"]["id"] == 3
    assert event["record"]["is_active"] is True
