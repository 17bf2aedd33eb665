from supabase import Client
from taplist.config import settings
from taplist.core.image_storage import ImageStorage
from taplist.core.realtime import ChangeFeed
from taplist.modules.display_settings.schemas import DisplaySettingsUpdate, DisplaySettingsResponse
from typing import Optional, Dict, Any
from datetime import datetime, timezone
from fastapi import HTTPException, UploadFile
import logging

logger = logging.getLogger(__name__)


class DisplaySettingsService:
    def __init__(self, supabase: Client, feed: Optional[ChangeFeed] = None):
        self.supabase = supabase
        self.feed = feed
        self.background_storage = ImageStorage(supabase, settings.backgrounds_bucket)

    def _get_row(self) -> Optional[Dict[str, Any]]:
        result = self.supabase.table("taplist_settings")\
            .select("*")\
            .limit(1)\
            .execute()
        return result.data[0] if result.data else None

    def _to_response(self, row: Optional[Dict[str, Any]]) -> DisplaySettingsResponse:
        data = dict(row or {})
        if not data.get("title"):
            data["title"] = settings.default_title
        return DisplaySettingsResponse(**data)

    def get_settings(self) -> DisplaySettingsResponse:
        """The display settings row, or defaults when none exists yet"""
        try:
            return self._to_response(self._get_row())
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_settings(self, settings_data: DisplaySettingsUpdate) -> DisplaySettingsResponse:
        """Update the singleton row, inserting it on first write"""
        try:
            update_data = settings_data.model_dump(exclude_unset=True)
            update_data["updated_at"] = datetime.now(timezone.utc).isoformat()

            existing = self._get_row()
            if existing:
                result = self.supabase.table("taplist_settings")\
                    .update(update_data)\
                    .eq("id", existing["id"])\
                    .execute()
                event_type = "UPDATE"
            else:
                result = self.supabase.table("taplist_settings")\
                    .insert({"title": settings.default_title, **update_data})\
                    .execute()
                event_type = "INSERT"

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to save display settings")

            row = result.data[0]
            logger.info(f"Display settings saved ({', '.join(sorted(k for k in update_data if k != 'updated_at')) or 'no fields'})")
            if self.feed is not None:
                self.feed.record_change("taplist_settings", event_type, row, existing)
            return self._to_response(row)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    async def upload_background(self, file: UploadFile) -> DisplaySettingsResponse:
        """Upload a background image and make it the display background"""
        previous = self.get_settings().background_image
        url = await self.background_storage.upload_file(file, prefix="background")
        updated = self.update_settings(DisplaySettingsUpdate(background_image=url))
        if previous and previous != url:
            self.background_storage.delete_image(previous)
        return updated

    def remove_background(self) -> DisplaySettingsResponse:
        """Clear the background image"""
        previous = self.get_settings().background_image
        updated = self.update_settings(DisplaySettingsUpdate(background_image=None))
        if previous:
            self.background_storage.delete_image(previous)
        return updated
