from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

# Display fields that carry their own font and color override
STYLED_FIELDS = ("title", "beverage_name", "brewery", "style", "abv", "description")


class DisplaySettingsUpdate(BaseModel):
    title: Optional[str] = Field(None, max_length=200)
    background_image: Optional[str] = None
    font_family: Optional[str] = Field(None, max_length=100)
    title_font: Optional[str] = Field(None, max_length=100)
    title_color: Optional[str] = Field(None, max_length=50)
    beverage_name_font: Optional[str] = Field(None, max_length=100)
    beverage_name_color: Optional[str] = Field(None, max_length=50)
    brewery_font: Optional[str] = Field(None, max_length=100)
    brewery_color: Optional[str] = Field(None, max_length=50)
    style_font: Optional[str] = Field(None, max_length=100)
    style_color: Optional[str] = Field(None, max_length=50)
    abv_font: Optional[str] = Field(None, max_length=100)
    abv_color: Optional[str] = Field(None, max_length=50)
    description_font: Optional[str] = Field(None, max_length=100)
    description_color: Optional[str] = Field(None, max_length=50)


class DisplaySettingsResponse(BaseModel):
    id: Optional[str] = None
    title: str
    background_image: Optional[str] = None
    font_family: Optional[str] = None
    title_font: Optional[str] = None
    title_color: Optional[str] = None
    beverage_name_font: Optional[str] = None
    beverage_name_color: Optional[str] = None
    brewery_font: Optional[str] = None
    brewery_color: Optional[str] = None
    style_font: Optional[str] = None
    style_color: Optional[str] = None
    abv_font: Optional[str] = None
    abv_color: Optional[str] = None
    description_font: Optional[str] = None
    description_color: Optional[str] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
