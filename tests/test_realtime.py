"""Tests for the change feed and its Server-Sent Events encoding."""

import json

import pytest

from taplist import main
from taplist.config import settings
from taplist.core.realtime import ChangeFeed, RealtimeBridge, event_stream, format_sse
from taplist.modules.display import routes as display_routes


def test_publish_reaches_every_subscriber():
    feed = ChangeFeed()
    first, second = feed.subscribe(), feed.subscribe()
    feed.publish("beverages", "INSERT", {"id": "b1"})
    assert first.get_nowait()["record"] == {"id": "b1"}
    assert second.get_nowait()["table"] == "beverages"


def test_full_queue_drops_oldest_event():
    feed = ChangeFeed(queue_size=2)
    queue = feed.subscribe()
    for tap_id in (1, 2, 3):
        feed.publish("taps", "UPDATE", {"id": tap_id})
    assert [queue.get_nowait()["record"]["id"] for _ in range(2)] == [2, 3]


def test_record_change_respects_local_echo():
    feed = ChangeFeed()
    queue = feed.subscribe()
    feed.local_echo = False
    feed.record_change("taps", "UPDATE", {"id": 1})
    assert queue.empty()


def test_format_sse():
    chunk = format_sse({"table": "taps", "type": "UPDATE"})
    assert chunk.startswith("event: change\ndata: ")
    assert chunk.endswith("\n\n")
    assert json.loads(chunk.split("data: ", 1)[1]) == {"table": "taps", "type": "UPDATE"}


@pytest.mark.asyncio
async def test_event_stream_emits_changes_and_unsubscribes():
    feed = ChangeFeed()
    stream = event_stream(feed, heartbeat_seconds=5)
    assert await stream.__anext__() == ": connected\n\n"
    assert feed.subscriber_count == 1

    feed.publish("taps", "UPDATE", {"id": 2, "is_active": True})
    chunk = await stream.__anext__()
    payload = json.loads(chunk.split("data: ", 1)[1])
    assert payload["table"] == "taps"
    assert payload["record"] == {"id": 2, "is_active": True}

    await stream.aclose()
    assert feed.subscriber_count == 0


@pytest.mark.asyncio
async def test_event_stream_heartbeat():
    feed = ChangeFeed()
    stream = event_stream(feed, heartbeat_seconds=0.01)
    await stream.__anext__()
    assert await stream.__anext__() == ": keepalive\n\n"
    await stream.aclose()


def test_bridge_republishes_postgres_changes():
    feed = ChangeFeed()
    queue = feed.subscribe()
    bridge = RealtimeBridge(feed, "https://fake.supabase.co", "key")
    bridge.handle_payload({"data": {
        "table": "beverages",
        "type": "DELETE",
        "record": None,
        "old_record": {"id": "b1"},
    }})
    bridge.handle_payload({"data": {"table": "user_roles", "type": "INSERT", "record": {"id": "r1"}}})
    event = queue.get_nowait()
    assert event["type"] == "DELETE"
    assert event["old_record"] == {"id": "b1"}
    assert queue.empty()


@pytest.mark.asyncio
async def test_events_route_streams_sse():
    feed = ChangeFeed()
    resp = await display_routes.display_events(feed)
    assert resp.media_type == "text/event-stream"
    assert resp.headers["cache-control"] == "no-cache"
    assert resp.headers["x-accel-buffering"] == "no"

    assert await resp.body_iterator.__anext__() == ": connected\n\n"
    assert feed.subscriber_count == 1
    await resp.body_iterator.aclose()
    assert feed.subscriber_count == 0


@pytest.mark.asyncio
async def test_startup_keeps_local_echo_when_bridge_fails(monkeypatch):
    async def failing_start(self):
        raise ConnectionError("realtime unavailable")

    monkeypatch.setattr(settings, "realtime_enabled", True)
    monkeypatch.setattr(RealtimeBridge, "start", failing_start)
    monkeypatch.setattr(main, "realtime_bridge", None)

    await main.startup_event()
    assert main.realtime_bridge is None
    assert main.change_feed.local_echo is True


@pytest.mark.asyncio
async def test_startup_and_shutdown_run_bridge(monkeypatch):
    async def start(self):
        self.feed.local_echo = False

    monkeypatch.setattr(settings, "realtime_enabled", True)
    monkeypatch.setattr(RealtimeBridge, "start", start)
    monkeypatch.setattr(main, "realtime_bridge", None)

    await main.startup_event()
    assert isinstance(main.realtime_bridge, RealtimeBridge)
    assert main.change_feed.local_echo is False

    await main.shutdown_event()
    assert main.change_feed.local_echo is True
