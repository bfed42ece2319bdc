"""Notification dispatcher.

``notify`` is the only writer of notification rows. The ``notify_*`` helpers
resolve recipients for each domain event and run after the triggering write has
committed: a failure there is logged and swallowed, never propagated to the
caller of the original mutation.
"""
import functools
import logging
from typing import Any, Iterable, Optional

from sqlalchemy.orm import Session

from eventhost.exceptions import NotFoundError
from eventhost.models.comment import Comment
from eventhost.models.event import Event
from eventhost.models.mention import Mention
from eventhost.models.notification import Notification, NotificationType, NOTIFICATION_TITLES
from eventhost.models.rsvp import Rsvp
from eventhost.models.user import User
from eventhost.services.event_access import find_event_by_id, rsvp_holder_ids

logger = logging.getLogger(__name__)


def notify(
    db: Session,
    recipient_id: str,
    notification_type: NotificationType,
    message: str,
    related_event_id: Optional[str] = None,
    related_comment_id: Optional[str] = None,
    title: Optional[str] = None,
) -> Notification:
    """Create one unread notification for ``recipient_id`` and commit it."""
    notification = Notification(
        type=notification_type,
        title=title or NOTIFICATION_TITLES[notification_type],
        message=message,
        is_read=False,
        user_id=recipient_id,
        related_event_id=related_event_id,
        related_comment_id=related_comment_id,
    )
    db.add(notification)
    db.commit()
    db.refresh(notification)
    logger.info("Notified user %s (%s)", recipient_id, notification_type.value)
    return notification


def _dispatch(
    db: Session,
    recipient_ids: Iterable[str],
    notification_type: NotificationType,
    message: str,
    related_event_id: Optional[str] = None,
    related_comment_id: Optional[str] = None,
) -> list[Notification]:
    created = []
    for recipient_id in recipient_ids:
        try:
            created.append(notify(
                db, recipient_id, notification_type, message,
                related_event_id=related_event_id,
                related_comment_id=related_comment_id,
            ))
        except Exception:
            db.rollback()
            logger.exception("Failed to send %s notification to user %s", notification_type.value, recipient_id)
    return created


def best_effort(func):
    """Run a post-commit dispatch; log and swallow anything it raises."""

    @functools.wraps(func)
    def wrapper(db: Session, *args: Any, **kwargs: Any) -> list[Notification]:
        try:
            return func(db, *args, **kwargs)
        except Exception:
            db.rollback()
            logger.exception("Notification dispatch %s failed", func.__name__)
            return []

    return wrapper


def _load_event(db: Session, event_id: str, notification_type: NotificationType) -> Optional[Event]:
    event = find_event_by_id(db, event_id)
    if event is None:
        logger.warning("Skipping %s dispatch: event %s not found", notification_type.value, event_id)
    return event


def _display_name(db: Session, user_id: str, fallback: str = "Someone") -> str:
    user = db.query(User).filter(User.id == user_id).first()
    return user.name if user is not None else fallback


@best_effort
def notify_new_rsvps(db: Session, event_id: str, rsvps: Iterable[Rsvp]) -> list[Notification]:
    """Tell each invitee they have been invited."""
    invitee_ids = [rsvp.invitee_id for rsvp in rsvps]
    event = _load_event(db, event_id, NotificationType.NEW_RSVP)
    if event is None:
        return []
    return _dispatch(
        db, invitee_ids, NotificationType.NEW_RSVP,
        f"You have been invited to {event.title}",
        related_event_id=event.id,
    )


@best_effort
def notify_rsvp_updated(db: Session, rsvp: Rsvp) -> list[Notification]:
    """Tell the host that an invitee changed their RSVP."""
    event_id, invitee_id, status = rsvp.event_id, rsvp.invitee_id, rsvp.status
    event = _load_event(db, event_id, NotificationType.RSVP_UPDATED)
    if event is None:
        return []
    name = _display_name(db, invitee_id)
    return _dispatch(
        db, [event.user_id], NotificationType.RSVP_UPDATED,
        f"{name} changed their RSVP to {status.value} for {event.title}",
        related_event_id=event.id,
    )


@best_effort
def notify_event_updated(db: Session, event_id: str) -> list[Notification]:
    """Tell every non-host RSVP holder that the event changed."""
    event = _load_event(db, event_id, NotificationType.EVENT_UPDATE)
    if event is None:
        return []
    return _dispatch(
        db, rsvp_holder_ids(db, event, exclude_host=True), NotificationType.EVENT_UPDATE,
        f"The event {event.title} has been updated",
        related_event_id=event.id,
    )


@best_effort
def notify_event_canceled(db: Session, event_id: str) -> list[Notification]:
    """Tell every RSVP holder, whatever their status, that the event is canceled."""
    event = _load_event(db, event_id, NotificationType.EVENT_CANCELED)
    if event is None:
        return []
    return _dispatch(
        db, rsvp_holder_ids(db, event), NotificationType.EVENT_CANCELED,
        f"The event {event.title} has been cancelled",
        related_event_id=event.id,
    )


@best_effort
def notify_new_comment(db: Session, comment: Comment) -> list[Notification]:
    """Tell the host about a comment on their event, unless they wrote it."""
    comment_id, event_id, author_id = comment.id, comment.event_id, comment.user_id
    event = _load_event(db, event_id, NotificationType.COMMENT)
    if event is None or event.user_id == author_id:
        return []
    author = _display_name(db, author_id)
    return _dispatch(
        db, [event.user_id], NotificationType.COMMENT,
        f"{author} has commented on your event: {event.title}",
        related_event_id=event.id,
        related_comment_id=comment_id,
    )


@best_effort
def notify_new_mention(db: Session, mention: Mention, comment: Comment) -> list[Notification]:
    """Tell a mentioned user where they were mentioned."""
    mentioned_id, comment_id, event_id = mention.mentioned_user_id, comment.id, comment.event_id
    event = _load_event(db, event_id, NotificationType.NEW_MENTION)
    if event is None:
        return []
    author = _display_name(db, comment.user_id)
    return _dispatch(
        db, [mentioned_id], NotificationType.NEW_MENTION,
        f"{author} mentioned you in a comment on {event.title}",
        related_event_id=event.id,
        related_comment_id=comment_id,
    )


def mark_as_read(db: Session, notification_ids: list[str], user_id: str) -> dict[str, Any]:
    """Flag the given notifications read; ids owned by other users are ignored."""
    updated = (
        db.query(Notification)
        .filter(Notification.id.in_(notification_ids), Notification.user_id == user_id)
        .update({Notification.is_read: True}, synchronize_session=False)
    )
    db.commit()
    logger.info("User %s marked %d of %d notifications read", user_id, updated, len(notification_ids))
    return {"success": True}


def list_notifications(db: Session, user_id: str, unread_only: bool = False) -> list[Notification]:
    query = db.query(Notification).filter(Notification.user_id == user_id)
    if unread_only:
        query = query.filter(Notification.is_read.is_(False))
    return query.order_by(Notification.created_at.desc(), Notification.id).all()


def get_notification(db: Session, notification_id: str, user_id: str) -> Notification:
    notification = (
        db.query(Notification)
        .filter(Notification.id == notification_id, Notification.user_id == user_id)
        .first()
    )
    if notification is None:
        raise NotFoundError("Notification not found")
    return notification


def delete_notification(db: Session, notification_id: str, user_id: str) -> None:
    notification = get_notification(db, notification_id, user_id)
    db.delete(notification)
    db.commit()
    logger.info("Deleted notification %s for user %s", notification_id, user_id)
