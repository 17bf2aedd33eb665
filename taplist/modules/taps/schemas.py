from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from taplist.modules.beverages.schemas import BeverageResponse


class TapAssign(BaseModel):
    beverage_id: Optional[str] = None  # null empties the tap


class TapResponse(BaseModel):
    id: int
    beverage_id: Optional[str] = None
    is_active: bool = False
    beverage: Optional[BeverageResponse] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
