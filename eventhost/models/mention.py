"""Mention ORM model — a user mentioned inside a comment."""
import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from eventhost.database import Base


class Mention(Base):
    __tablename__ = "mentions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    comment_id = Column(String(36), ForeignKey("comments.id"), nullable=False, index=True)
    mentioned_user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    comment = relationship("Comment", back_populates="mentions")
