"""Event lookups and the access rules shared by every service.

An event is visible to its host, to anyone holding an RSVP for it, and to
everybody when it is public.
"""
from typing import Optional

from sqlalchemy.orm import Session

from eventhost.exceptions import EventCanceledError, ForbiddenError, NotFoundError
from eventhost.models.event import Event
from eventhost.models.rsvp import Rsvp


def find_event_by_id(db: Session, event_id: str) -> Optional[Event]:
    return db.query(Event).filter(Event.id == event_id).first()


def can_view(db: Session, event: Event, user_id: str) -> bool:
    if event.user_id == user_id or not event.is_private:
        return True
    return (
        db.query(Rsvp.id)
        .filter(Rsvp.event_id == event.id, Rsvp.invitee_id == user_id)
        .first()
        is not None
    )


def get_visible_event(db: Session, event_id: str, user_id: str) -> Event:
    """Return the event or raise NotFoundError when it is absent or hidden from the user."""
    event = find_event_by_id(db, event_id)
    if event is None or not can_view(db, event, user_id):
        raise NotFoundError("Event not found")
    return event


def ensure_host(event: Event, user_id: str, action: str = "modify this event") -> None:
    if event.user_id != user_id:
        raise ForbiddenError(f"Only the host may {action}")


def ensure_not_canceled(event: Event, detail: Optional[str] = None) -> None:
    if event.is_canceled:
        raise EventCanceledError(detail)


def rsvp_holder_ids(db: Session, event: Event, exclude_host: bool = False) -> list[str]:
    """Ids of users holding an RSVP for the event, in invitation order."""
    query = db.query(Rsvp.invitee_id).filter(Rsvp.event_id == event.id)
    if exclude_host:
        query = query.filter(Rsvp.invitee_id != event.user_id)
    seen: list[str] = []
    for (invitee_id,) in query.order_by(Rsvp.created_at, Rsvp.id).all():
        if invitee_id not in seen:
            seen.append(invitee_id)
    return seen
