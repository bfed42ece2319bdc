"""Notification ORM model."""
import uuid
import enum
from sqlalchemy import Column, String, Text, Boolean, DateTime, ForeignKey, Enum as SAEnum
from sqlalchemy.sql import func
from eventhost.database import Base


class NotificationType(str, enum.Enum):
    EVENT_UPDATE = "EVENT_UPDATE"
    EVENT_CANCELED = "EVENT_CANCELED"
    NEW_RSVP = "NEW_RSVP"
    RSVP_UPDATED = "RSVP_UPDATED"
    NEW_MENTION = "NEW_MENTION"
    COMMENT = "COMMENT"


NOTIFICATION_TITLES = {
    NotificationType.NEW_RSVP: "New RSVP",
    NotificationType.RSVP_UPDATED: "RSVP Updated",
    NotificationType.COMMENT: "New Comment",
    NotificationType.NEW_MENTION: "New Mention",
    NotificationType.EVENT_UPDATE: "Event Updated",
    NotificationType.EVENT_CANCELED: "Event Canceled",
}


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    type = Column(SAEnum(NotificationType), nullable=False)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    is_read = Column(Boolean, nullable=False, default=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    related_event_id = Column(String(36), ForeignKey("events.id"), nullable=True)
    related_comment_id = Column(String(36), ForeignKey("comments.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
