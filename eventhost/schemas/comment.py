"""Pydantic schemas for Comments and Mentions."""
from datetime import datetime
from pydantic import BaseModel, Field


class CommentCreate(BaseModel):
    content: str = Field(min_length=1)
    mentions: list[str] = []  # emails of mentioned users


class CommentUpdate(BaseModel):
    content: str = Field(min_length=1)


class MentionOut(BaseModel):
    id: str
    comment_id: str
    mentioned_user_id: str
    user_id: str
    created_at: datetime

    model_config = {"from_attributes": True}


class CommentOut(BaseModel):
    id: str
    content: str
    event_id: str
    user_id: str
    created_at: datetime
    updated_at: datetime
    mentions: list[MentionOut] = []

    model_config = {"from_attributes": True}
