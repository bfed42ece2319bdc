"""Pydantic schemas for Notifications."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from eventhost.models.notification import NotificationType


class NotificationOut(BaseModel):
    id: str
    type: NotificationType
    title: str
    message: str
    is_read: bool
    user_id: str
    related_event_id: Optional[str] = None
    related_comment_id: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class MarkReadRequest(BaseModel):
    notification_ids: list[str] = Field(min_length=1)


class MarkReadOut(BaseModel):
    success: bool
