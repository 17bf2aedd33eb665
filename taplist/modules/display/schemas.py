from pydantic import BaseModel
from typing import Optional, List, Dict
from taplist.modules.display_settings.schemas import DisplaySettingsResponse
from taplist.modules.taps.schemas import TapResponse


class FieldStyle(BaseModel):
    font: Optional[str] = None
    color: Optional[str] = None


class DisplayResponse(BaseModel):
    settings: DisplaySettingsResponse
    styles: Dict[str, FieldStyle]  # per display field, font falls back to font_family
    taps: List[TapResponse]
    active_count: int
    tap_count: int


class SummaryResponse(BaseModel):
    beverage_count: int
    beverages_by_type: Dict[str, int]
    active_taps: int
    tap_count: int
