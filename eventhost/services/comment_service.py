"""Comments on events and the mentions inside them."""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from eventhost.database import atomic
from eventhost.exceptions import ForbiddenError, NotFoundError
from eventhost.models.comment import Comment
from eventhost.models.event import Event
from eventhost.models.mention import Mention
from eventhost.models.user import User
from eventhost.services import notification_service
from eventhost.services.event_access import can_view, get_visible_event, rsvp_holder_ids

logger = logging.getLogger(__name__)


def create_comment(
    db: Session,
    event_id: str,
    actor_id: str,
    content: str,
    mention_emails: Optional[list[str]] = None,
) -> Comment:
    """Post a comment, notify the host, and mention users by email.

    Mentioned users who already hold an RSVP for the event, and the author
    themselves, are not mentioned.
    """
    with atomic(db):
        event = get_visible_event(db, event_id, actor_id)
        comment = Comment(content=content, event_id=event.id, user_id=actor_id)
        db.add(comment)
        db.flush()
    db.refresh(comment)
    logger.info("User %s commented on event %s (%s)", actor_id, event_id, comment.id)

    notification_service.notify_new_comment(db, comment)
    if mention_emails:
        _create_mentions(db, comment, mention_emails)
    db.refresh(comment)
    return comment


def _create_mentions(db: Session, comment: Comment, emails: list[str]) -> list[Mention]:
    event = db.query(Event).filter(Event.id == comment.event_id).first()
    if event is None:
        logger.warning("Skipping mentions: event %s not found", comment.event_id)
        return []

    excluded = set(rsvp_holder_ids(db, event))
    excluded.add(comment.user_id)
    users = db.query(User).filter(User.email.in_(emails)).order_by(User.email).all()
    mentioned = [user for user in users if user.id not in excluded]
    if not mentioned:
        return []

    with atomic(db):
        mentions = [
            Mention(comment_id=comment.id, mentioned_user_id=user.id, user_id=comment.user_id)
            for user in mentioned
        ]
        db.add_all(mentions)
    logger.info("Comment %s mentions %d user(s)", comment.id, len(mentions))

    for mention in mentions:
        notification_service.notify_new_mention(db, mention, comment)
    return mentions


def _get_own_comment(db: Session, comment_id: str, actor_id: str) -> Comment:
    comment = db.query(Comment).filter(Comment.id == comment_id).first()
    if comment is None or not can_view(db, comment.event, actor_id):
        raise NotFoundError("Comment not found")
    if comment.user_id != actor_id:
        raise ForbiddenError("Only the author may change this comment")
    return comment


def update_comment(db: Session, comment_id: str, actor_id: str, content: str) -> Comment:
    with atomic(db):
        comment = _get_own_comment(db, comment_id, actor_id)
        comment.content = content
    db.refresh(comment)
    logger.info("Updated comment %s", comment_id)
    return comment


def delete_comment(db: Session, comment_id: str, actor_id: str) -> None:
    with atomic(db):
        comment = _get_own_comment(db, comment_id, actor_id)
        db.delete(comment)
    logger.info("Deleted comment %s", comment_id)


def list_comments_for_event(db: Session, event_id: str, actor_id: str) -> list[Comment]:
    event = get_visible_event(db, event_id, actor_id)
    return (
        db.query(Comment)
        .filter(Comment.event_id == event.id)
        .order_by(Comment.created_at, Comment.id)
        .all()
    )


def list_mentions_for_user(db: Session, user_id: str) -> list[Mention]:
    return (
        db.query(Mention)
        .filter(Mention.mentioned_user_id == user_id)
        .order_by(Mention.created_at.desc(), Mention.id)
        .all()
    )
