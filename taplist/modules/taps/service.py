from supabase import Client
from taplist.config import settings
from taplist.core.realtime import ChangeFeed
from taplist.modules.beverages.schemas import BeverageResponse
from taplist.modules.taps.schemas import TapResponse
from typing import List, Optional, Dict, Any
from datetime import datetime, timezone
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class TapService:
    def __init__(self, supabase: Client, feed: Optional[ChangeFeed] = None):
        self.supabase = supabase
        self.feed = feed

    def _publish(self, event_type: str, record: Dict[str, Any]) -> None:
        if self.feed is not None:
            self.feed.record_change("taps", event_type, record)

    def _validate_tap_id(self, tap_id: int) -> None:
        if tap_id < 1 or tap_id > settings.tap_count:
            raise HTTPException(status_code=404, detail="Tap not found")

    def _get_beverages(self, beverage_ids: List[str]) -> Dict[str, BeverageResponse]:
        if not beverage_ids:
            return {}
        result = self.supabase.table("beverages")\
            .select("*")\
            .in_("id", beverage_ids)\
            .execute()
        return {b["id"]: BeverageResponse(**b) for b in result.data or []}

    def _to_responses(self, rows: List[Dict[str, Any]]) -> List[TapResponse]:
        beverages = self._get_beverages(list({r["beverage_id"] for r in rows if r.get("beverage_id")}))
        taps = []
        for row in rows:
            beverage = beverages.get(row.get("beverage_id")) if row.get("beverage_id") else None
            taps.append(TapResponse(
                id=row["id"],
                beverage_id=row.get("beverage_id"),
                is_active=bool(row.get("is_active")),
                beverage=beverage,
                updated_at=row.get("updated_at"),
            ))
        return taps

    def list_taps(self) -> List[TapResponse]:
        """All taps 1..tap_count in order; taps without a row are reported empty"""
        try:
            result = self.supabase.table("taps")\
                .select("*")\
                .gte("id", 1)\
                .lte("id", settings.tap_count)\
                .order("id")\
                .execute()
            rows = {r["id"]: r for r in result.data or []}
            ordered = [
                rows.get(tap_id, {"id": tap_id, "beverage_id": None, "is_active": False})
                for tap_id in range(1, settings.tap_count + 1)
            ]
            return self._to_responses(ordered)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_tap(self, tap_id: int) -> TapResponse:
        """Get tap by ID"""
        self._validate_tap_id(tap_id)
        try:
            result = self.supabase.table("taps")\
                .select("*")\
                .eq("id", tap_id)\
                .limit(1)\
                .execute()
            row = result.data[0] if result.data else {"id": tap_id, "beverage_id": None, "is_active": False}
            return self._to_responses([row])[0]
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def assign_tap(self, tap_id: int, beverage_id: Optional[str]) -> TapResponse:
        """Put a beverage on a tap, or empty it when beverage_id is None"""
        self._validate_tap_id(tap_id)
        try:
            if beverage_id:
                existing = self.supabase.table("beverages")\
                    .select("id")\
                    .eq("id", beverage_id)\
                    .limit(1)\
                    .execute()
                if not existing.data:
                    raise HTTPException(status_code=404, detail="Beverage not found")
            else:
                beverage_id = None

            result = self.supabase.table("taps").upsert({
                "id": tap_id,
                "beverage_id": beverage_id,
                "is_active": beverage_id is not None,
                "updated_at": _now()
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to update tap")

            row = result.data[0]
            if beverage_id:
                logger.info(f"Tap {tap_id} now serving beverage {beverage_id}")
            else:
                logger.info(f"Tap {tap_id} is now empty")
            self._publish("UPDATE", row)
            return self._to_responses([row])[0]
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def clear_tap(self, tap_id: int) -> TapResponse:
        return self.assign_tap(tap_id, None)

    def unassign_beverage(self, beverage_id: str) -> List[int]:
        """Empty every tap serving beverage_id. Returns the affected tap ids."""
        try:
            result = self.supabase.table("taps")\
                .update({"beverage_id": None, "is_active": False, "updated_at": _now()})\
                .eq("beverage_id", beverage_id)\
                .execute()
            rows = result.data or []
            for row in rows:
                self._publish("UPDATE", row)
            tap_ids = sorted(r["id"] for r in rows)
            if tap_ids:
                logger.info(f"Unassigned beverage {beverage_id} from taps {tap_ids}")
            return tap_ids
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
