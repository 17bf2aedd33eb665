from collections import Counter
from typing import Dict

from fastapi import HTTPException
from supabase import Client

from taplist.config import settings
from taplist.modules.display.schemas import DisplayResponse, FieldStyle, SummaryResponse
from taplist.modules.display_settings.schemas import STYLED_FIELDS, DisplaySettingsResponse
from taplist.modules.display_settings.service import DisplaySettingsService
from taplist.modules.taps.service import TapService


def resolve_styles(display_settings: DisplaySettingsResponse) -> Dict[str, FieldStyle]:
    values = display_settings.model_dump()
    return {
        field: FieldStyle(
            font=values.get(f"{field}_font") or display_settings.font_family,
            color=values.get(f"{field}_color"),
        )
        for field in STYLED_FIELDS
    }


class DisplayService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_display(self) -> DisplayResponse:
        """Everything the public taplist page renders"""
        display_settings = DisplaySettingsService(self.supabase).get_settings()
        taps = TapService(self.supabase).list_taps()
        return DisplayResponse(
            settings=display_settings,
            styles=resolve_styles(display_settings),
            taps=taps,
            active_count=sum(1 for tap in taps if tap.is_active),
            tap_count=settings.tap_count,
        )

    def get_summary(self) -> SummaryResponse:
        """Quick stats for the management console"""
        try:
            result = self.supabase.table("beverages").select("id, type").execute()
            beverages = result.data or []
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        taps = TapService(self.supabase).list_taps()
        return SummaryResponse(
            beverage_count=len(beverages),
            beverages_by_type=dict(Counter(b["type"] for b in beverages)),
            active_taps=sum(1 for tap in taps if tap.beverage_id),
            tap_count=settings.tap_count,
        )
