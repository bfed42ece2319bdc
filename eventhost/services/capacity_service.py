"""Capacity calculator — effective reserved spots versus an event's guest cap.

These are pure reads. Callers making an admission decision must run them in the
same transaction as the write, after ``lock_event``, so two concurrent admits
cannot both see the last free spot.
"""
import logging
from typing import Any, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from eventhost.exceptions import CapacityExceededError, NotFoundError, ValidationError
from eventhost.models.event import Event
from eventhost.models.rsvp import Rsvp, CAPACITY_CONSUMING_STATUSES
from eventhost.services.event_access import can_view

logger = logging.getLogger(__name__)


def effective_guest_count(db: Session, event_id: str, exclude_rsvp_id: Optional[str] = None) -> int:
    """Count RSVPs for the event whose status holds a spot (YES, MAYBE, PENDING)."""
    query = db.query(func.count(Rsvp.id)).filter(
        Rsvp.event_id == event_id,
        Rsvp.status.in_(CAPACITY_CONSUMING_STATUSES),
    )
    if exclude_rsvp_id:
        query = query.filter(Rsvp.id != exclude_rsvp_id)
    return int(query.scalar() or 0)


def available_spots(db: Session, event: Event, exclude_rsvp_id: Optional[str] = None) -> int:
    return event.max_guests - effective_guest_count(db, event.id, exclude_rsvp_id)


def can_admit(db: Session, event: Event, additional: int = 1, exclude_rsvp_id: Optional[str] = None) -> bool:
    return available_spots(db, event, exclude_rsvp_id) >= additional


def ensure_capacity(db: Session, event: Event, additional: int = 1, exclude_rsvp_id: Optional[str] = None) -> None:
    """Raise CapacityExceededError if ``additional`` more guests do not fit."""
    effective = effective_guest_count(db, event.id, exclude_rsvp_id)
    if effective + additional > event.max_guests:
        logger.warning(
            "Event %s at capacity: %d/%d reserved, %d requested",
            event.id, effective, event.max_guests, additional,
        )
        raise CapacityExceededError(effective, event.max_guests, additional)


def lock_event(db: Session, event_id: str) -> Optional[Event]:
    """Load the event with a lock held until the current transaction ends.

    SQLite has no row locks and ignores FOR UPDATE, so there a no-op write to
    the event row takes the database write lock before anything is counted.
    """
    query = db.query(Event).filter(Event.id == event_id)
    if db.get_bind().dialect.name == "sqlite":
        query.update({Event.updated_at: Event.updated_at}, synchronize_session=False)
    return query.with_for_update().first()


def capacity_snapshot(db: Session, event: Event, additional: int = 1) -> dict[str, Any]:
    effective = effective_guest_count(db, event.id)
    spots = event.max_guests - effective
    return {
        "event_id": event.id,
        "effective_guests": effective,
        "max_guests": event.max_guests,
        "available_spots": spots,
        "can_add_guests": spots >= additional,
    }


def check_event_capacity(db: Session, event_id: str, actor_id: str, additional_guests: int = 1) -> dict[str, Any]:
    """Live capacity feedback for the client."""
    if additional_guests < 1:
        raise ValidationError("additional_guests must be at least 1")

    event = db.query(Event).filter(Event.id == event_id).first()
    if event is None or not can_view(db, event, actor_id):
        raise NotFoundError("Event not found")
    return capacity_snapshot(db, event, additional_guests)
