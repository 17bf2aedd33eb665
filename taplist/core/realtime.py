"""
Change feed for display clients.

Services publish table changes after successful writes; every open
``/display/events`` stream holds one bounded queue. With REALTIME_ENABLED the
feed is instead fed by Supabase Realtime ``postgres_changes`` so writes made by
other instances (or straight in the database) reach local clients too.
"""

import asyncio
import json
import logging
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Dict, Optional, Set, Tuple

from taplist.config import settings

logger = logging.getLogger(__name__)

DISPLAY_TABLES: Tuple[str, ...] = ("beverages", "taps", "taplist_settings")


class ChangeFeed:
    def __init__(self, queue_size: int = 100):
        self.queue_size = queue_size
        # Off while the Supabase Realtime bridge delivers the same changes
        self.local_echo = True
        self._subscribers: Set[asyncio.Queue] = set()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self) -> asyncio.Queue:
        queue: asyncio.Queue = asyncio.Queue(maxsize=self.queue_size)
        self._subscribers.add(queue)
        logger.debug(f"Display client subscribed ({len(self._subscribers)} open)")
        return queue

    def unsubscribe(self, queue: asyncio.Queue) -> None:
        self._subscribers.discard(queue)
        logger.debug(f"Display client unsubscribed ({len(self._subscribers)} open)")

    def publish(
        self,
        table: str,
        event_type: str,
        record: Optional[Dict[str, Any]] = None,
        old_record: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Fan an event out to every subscriber. Never blocks: a full queue loses its oldest event."""
        event = {
            "table": table,
            "type": event_type,
            "record": record,
            "old_record": old_record,
            "commit_timestamp": datetime.now(timezone.utc).isoformat(),
        }
        for queue in list(self._subscribers):
            if queue.full():
                try:
                    queue.get_nowait()
                except asyncio.QueueEmpty:
                    pass
            queue.put_nowait(event)
        return event

    def record_change(
        self,
        table: str,
        event_type: str,
        record: Optional[Dict[str, Any]] = None,
        old_record: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Called by services after a write."""
        if self.local_echo:
            self.publish(table, event_type, record, old_record)


def format_sse(event: Dict[str, Any]) -> str:
    return f"event: change\ndata: {json.dumps(event, default=str)}\n\n"


async def event_stream(feed: ChangeFeed, heartbeat_seconds: float) -> AsyncIterator[str]:
    """Server-Sent Events body: one ``change`` event per table change, comments as keep-alive."""
    queue = feed.subscribe()
    try:
        yield ": connected\n\n"
        while True:
            try:
                event = await asyncio.wait_for(queue.get(), timeout=heartbeat_seconds)
            except asyncio.TimeoutError:
                yield ": keepalive\n\n"
                continue
            yield format_sse(event)
    finally:
        feed.unsubscribe(queue)


class RealtimeBridge:
    """Republishes Supabase Realtime postgres_changes on the display tables into a ChangeFeed."""

    def __init__(self, feed: ChangeFeed, url: str, key: str, tables: Tuple[str, ...] = DISPLAY_TABLES):
        self.feed = feed
        self.url = url
        self.key = key
        self.tables = tables
        self._client = None
        self._channel = None

    async def start(self) -> None:
        from supabase import acreate_client

        self._client = await acreate_client(self.url, self.key)
        channel = self._client.channel("taplist-changes")
        for table in self.tables:
            channel.on_postgres_changes("*", schema="public", table=table, callback=self.handle_payload)
        await channel.subscribe()
        self._channel = channel
        self.feed.local_echo = False
        logger.info(f"Realtime bridge subscribed to {', '.join(self.tables)}")

    async def stop(self) -> None:
        if self._client is not None and self._channel is not None:
            try:
                await self._client.remove_channel(self._channel)
            except Exception as e:
                logger.warning(f"Failed to remove realtime channel: {e}")
        self._channel = None
        self.feed.local_echo = True

    def handle_payload(self, payload: Dict[str, Any]) -> None:
        data = payload.get("data", payload)
        table = data.get("table")
        if table not in self.tables:
            return
        event_type = data.get("type") or data.get("eventType")
        event_type = getattr(event_type, "value", event_type)
        self.feed.publish(
            table,
            str(event_type),
            data.get("record") or data.get("new"),
            data.get("old_record") or data.get("old"),
        )


change_feed = ChangeFeed(queue_size=settings.events_queue_size)


def get_change_feed() -> ChangeFeed:
    return change_feed
