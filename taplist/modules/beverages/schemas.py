from enum import Enum
from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime


class BeverageType(str, Enum):
    BEER = "beer"
    WINE = "wine"
    COFFEE = "coffee"
    OTHER = "other"


def _blank_to_none(value):
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


class BeverageCreate(BaseModel):
    name: str = Field(..., max_length=200)
    type: BeverageType = BeverageType.BEER
    brewery: Optional[str] = Field(None, max_length=200)
    abv: Optional[float] = Field(None, ge=0, le=100)
    style: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    label: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

    @field_validator("brewery", "style", "description", "label", mode="before")
    @classmethod
    def blank_optional(cls, value):
        return _blank_to_none(value)


class BeverageUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=200)
    type: Optional[BeverageType] = None
    brewery: Optional[str] = Field(None, max_length=200)
    abv: Optional[float] = Field(None, ge=0, le=100)
    style: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    label: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: Optional[str]) -> str:
        # Only runs when name was sent; null and blank would violate NOT NULL
        value = (value or "").strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

    @field_validator("type")
    @classmethod
    def type_not_null(cls, value: Optional[BeverageType]) -> BeverageType:
        if value is None:
            raise ValueError("type must not be null")
        return value

    @field_validator("brewery", "style", "description", "label", mode="before")
    @classmethod
    def blank_optional(cls, value):
        return _blank_to_none(value)


class BeverageResponse(BaseModel):
    id: str
    name: str
    type: str
    brewery: Optional[str] = None
    abv: Optional[float] = None
    style: Optional[str] = None
    description: Optional[str] = None
    label: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
