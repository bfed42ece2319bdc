"""Event ORM model."""
import uuid
from sqlalchemy import Column, String, Text, DateTime, Integer, Boolean, ForeignKey, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from eventhost.database import Base


class Event(Base):
    __tablename__ = "events"
    __table_args__ = (
        CheckConstraint("max_guests >= 0", name="ck_events_max_guests_non_negative"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    date_time = Column(DateTime(timezone=True), nullable=False)
    location = Column(String(500), nullable=False)
    max_guests = Column(Integer, nullable=False, default=0)
    image_url = Column(String(1000), nullable=True)
    is_private = Column(Boolean, nullable=False, default=False)
    is_canceled = Column(Boolean, nullable=False, default=False)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    host = relationship("User")
    rsvps = relationship("Rsvp", back_populates="event", cascade="all, delete-orphan")
    comments = relationship("Comment", back_populates="event", cascade="all, delete-orphan")
    notifications = relationship("Notification", cascade="all, delete-orphan")
