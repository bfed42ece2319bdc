"""Pydantic schemas for RSVPs."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from eventhost.models.rsvp import RsvpStatus
from eventhost.schemas.event import CapacityOut


class RsvpCreate(BaseModel):
    event_id: str
    invitee_id: str
    status: RsvpStatus = RsvpStatus.PENDING


class RsvpBulkCreate(BaseModel):
    event_id: str
    invitee_ids: list[str] = Field(min_length=1)


class RsvpUpdate(BaseModel):
    status: RsvpStatus


class RsvpOut(BaseModel):
    id: str
    event_id: str
    invitee_id: str
    user_id: str
    status: RsvpStatus
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class RsvpBulkOut(BaseModel):
    count: int
    rsvps: list[RsvpOut] = []


class StatusOption(BaseModel):
    status: RsvpStatus
    enabled: bool


class StatusOptionsOut(BaseModel):
    rsvp_id: str
    current_status: RsvpStatus
    capacity: Optional[CapacityOut] = None
    options: list[StatusOption] = []
