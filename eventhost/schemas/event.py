"""Pydantic schemas for Events."""
from datetime import datetime, timezone
from typing import Optional

import pytz
from pydantic import BaseModel, Field, field_validator


def _ensure_future(value: datetime) -> datetime:
    """Naive datetimes are taken as UTC; the result must lie strictly in the future."""
    if value.tzinfo is None:
        value = pytz.utc.localize(value)
    if value <= datetime.now(timezone.utc):
        raise ValueError("Event date must be in the future")
    return value


class EventCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    date_time: datetime
    location: str = Field(min_length=1, max_length=500)
    max_guests: int = Field(ge=0)
    image_url: Optional[str] = None
    is_private: bool = False

    @field_validator("date_time")
    @classmethod
    def check_future_date(cls, value: datetime) -> datetime:
        return _ensure_future(value)


class EventUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    date_time: Optional[datetime] = None
    location: Optional[str] = Field(default=None, min_length=1, max_length=500)
    max_guests: Optional[int] = Field(default=None, ge=0)
    image_url: Optional[str] = None
    is_private: Optional[bool] = None

    @field_validator("date_time")
    @classmethod
    def check_future_date(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _ensure_future(value) if value is not None else value


class EventOut(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    date_time: datetime
    location: str
    max_guests: int
    image_url: Optional[str] = None
    is_private: bool
    is_canceled: bool
    user_id: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CapacityOut(BaseModel):
    event_id: str
    effective_guests: int
    max_guests: int
    available_spots: int
    can_add_guests: bool
