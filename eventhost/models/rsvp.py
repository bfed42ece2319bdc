"""Rsvp ORM model — one invitee's relationship to one event."""
import uuid
import enum
from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint, Enum as SAEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from eventhost.database import Base


class RsvpStatus(str, enum.Enum):
    PENDING = "PENDING"
    YES = "YES"
    MAYBE = "MAYBE"
    NO = "NO"


# NO is the only status that does not hold a spot.
CAPACITY_CONSUMING_STATUSES = (RsvpStatus.PENDING, RsvpStatus.YES, RsvpStatus.MAYBE)


class Rsvp(Base):
    __tablename__ = "rsvps"
    __table_args__ = (
        UniqueConstraint("event_id", "invitee_id", name="uq_rsvps_event_invitee"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    event_id = Column(String(36), ForeignKey("events.id"), nullable=False, index=True)
    invitee_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    status = Column(SAEnum(RsvpStatus), nullable=False, default=RsvpStatus.PENDING, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    event = relationship("Event", back_populates="rsvps")
    invitee = relationship("User", foreign_keys=[invitee_id])
