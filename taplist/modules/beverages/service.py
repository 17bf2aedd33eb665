from supabase import Client
from taplist.config import settings
from taplist.core.image_storage import ImageStorage
from taplist.core.realtime import ChangeFeed
from taplist.modules.beverages.schemas import BeverageCreate, BeverageUpdate, BeverageResponse, BeverageType
from taplist.modules.taps.service import TapService
from typing import List, Optional, Dict, Any
from fastapi import HTTPException, UploadFile
import logging

logger = logging.getLogger(__name__)


class BeverageService:
    def __init__(self, supabase: Client, feed: Optional[ChangeFeed] = None):
        self.supabase = supabase
        self.feed = feed
        self.label_storage = ImageStorage(supabase, settings.labels_bucket)

    def _publish(self, event_type: str, record: Optional[Dict[str, Any]], old_record: Optional[Dict[str, Any]] = None) -> None:
        if self.feed is not None:
            self.feed.record_change("beverages", event_type, record, old_record)

    def create_beverage(self, beverage_data: BeverageCreate) -> BeverageResponse:
        """Add a beverage to the library"""
        try:
            result = self.supabase.table("beverages")\
                .insert(beverage_data.model_dump(mode="json"))\
                .execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create beverage")

            row = result.data[0]
            logger.info(f"Beverage created: {row['id']} ({row['name']})")
            self._publish("INSERT", row)
            return BeverageResponse(**row)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_beverage_by_id(self, beverage_id: str) -> BeverageResponse:
        """Get beverage by ID"""
        try:
            result = self.supabase.table("beverages")\
                .select("*")\
                .eq("id", beverage_id)\
                .limit(1)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Beverage not found")

            return BeverageResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_beverages(self, beverage_type: Optional[BeverageType] = None) -> List[BeverageResponse]:
        """List the beverage library, optionally filtered by type"""
        try:
            query = self.supabase.table("beverages").select("*")
            if beverage_type:
                query = query.eq("type", beverage_type.value)
            result = query.order("name").execute()
            return [BeverageResponse(**b) for b in result.data or []]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_beverage(self, beverage_id: str, beverage_data: BeverageUpdate) -> BeverageResponse:
        """Update the supplied fields of a beverage"""
        try:
            update_data = beverage_data.model_dump(mode="json", exclude_unset=True)
            if not update_data:
                # No changes, return existing
                return self.get_beverage_by_id(beverage_id)

            result = self.supabase.table("beverages")\
                .update(update_data)\
                .eq("id", beverage_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Beverage not found")

            row = result.data[0]
            logger.info(f"Beverage updated: {beverage_id} ({', '.join(sorted(update_data))})")
            self._publish("UPDATE", row)
            return BeverageResponse(**row)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_beverage(self, beverage_id: str) -> bool:
        """Delete beverage after emptying every tap that serves it"""
        beverage = self.get_beverage_by_id(beverage_id)
        try:
            TapService(self.supabase, self.feed).unassign_beverage(beverage_id)

            result = self.supabase.table("beverages")\
                .delete()\
                .eq("id", beverage_id)\
                .execute()

            if beverage.label:
                self.label_storage.delete_image(beverage.label)

            logger.info(f"Beverage deleted: {beverage_id} ({beverage.name})")
            self._publish("DELETE", None, beverage.model_dump(mode="json"))
            return len(result.data or []) > 0
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    async def upload_label(self, beverage_id: str, file: UploadFile) -> BeverageResponse:
        """Upload a label image and point the beverage at it"""
        beverage = self.get_beverage_by_id(beverage_id)
        label_url = await self.label_storage.upload_file(file, prefix=beverage_id)
        updated = self.update_beverage(beverage_id, BeverageUpdate(label=label_url))
        if beverage.label and beverage.label != label_url:
            self.label_storage.delete_image(beverage.label)
        return updated
