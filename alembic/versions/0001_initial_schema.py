"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Creates the EventHost tables: users, events, rsvps, comments, mentions,
notifications.
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

RSVP_STATUS = sa.Enum("PENDING", "YES", "MAYBE", "NO", name="rsvpstatus")
NOTIFICATION_TYPE = sa.Enum(
    "EVENT_UPDATE", "EVENT_CANCELED", "NEW_RSVP", "RSVP_UPDATED", "NEW_MENTION", "COMMENT",
    name="notificationtype",
)


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "events",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("date_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("location", sa.String(500), nullable=False),
        sa.Column("max_guests", sa.Integer, nullable=False, server_default="0"),
        sa.Column("image_url", sa.String(1000), nullable=True),
        sa.Column("is_private", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("is_canceled", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("max_guests >= 0", name="ck_events_max_guests_non_negative"),
    )
    op.create_index("ix_events_user_id", "events", ["user_id"])

    # One RSVP per (event, invitee); capacity counts rely on it.
    op.create_table(
        "rsvps",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("event_id", sa.String(36), sa.ForeignKey("events.id"), nullable=False),
        sa.Column("invitee_id", sa.String(36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("status", RSVP_STATUS, nullable=False, server_default="PENDING"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("event_id", "invitee_id", name="uq_rsvps_event_invitee"),
    )
    op.create_index("ix_rsvps_event_id", "rsvps", ["event_id"])
    op.create_index("ix_rsvps_invitee_id", "rsvps", ["invitee_id"])
    op.create_index("ix_rsvps_status", "rsvps", ["status"])

    op.create_table(
        "comments",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("event_id", sa.String(36), sa.ForeignKey("events.id"), nullable=False),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_comments_event_id", "comments", ["event_id"])

    op.create_table(
        "mentions",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("comment_id", sa.String(36), sa.ForeignKey("comments.id"), nullable=False),
        sa.Column("mentioned_user_id", sa.String(36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_mentions_comment_id", "mentions", ["comment_id"])
    op.create_index("ix_mentions_mentioned_user_id", "mentions", ["mentioned_user_id"])

    op.create_table(
        "notifications",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("type", NOTIFICATION_TYPE, nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("message", sa.Text, nullable=False),
        sa.Column("is_read", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("related_event_id", sa.String(36), sa.ForeignKey("events.id"), nullable=True),
        sa.Column("related_comment_id", sa.String(36), sa.ForeignKey("comments.id"), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_notifications_user_id", "notifications", ["user_id"])
    op.create_index("ix_notifications_is_read", "notifications", ["is_read"])


def downgrade() -> None:
    op.drop_table("notifications")
    op.drop_table("mentions")
    op.drop_table("comments")
    op.drop_table("rsvps")
    op.drop_table("events")
    op.drop_table("users")
    NOTIFICATION_TYPE.drop(op.get_bind(), checkfirst=True)
    RSVP_STATUS.drop(op.get_bind(), checkfirst=True)
