"""Event service — host-owned events and their lifecycle.

Responsibilities:
- Authorization: only the host may update, cancel or delete an event
- Cancellation is terminal: canceled events reject edits and a second cancel
- Guest cap: ``max_guests`` may not drop below the current effective guest count
- Post-commit fan-out of EVENT_UPDATE / EVENT_CANCELED notifications
"""
import logging
from typing import Any

from sqlalchemy.orm import Session

from eventhost.database import atomic
from eventhost.exceptions import CapacityExceededError, EventCanceledError, NotFoundError
from eventhost.models.event import Event
from eventhost.models.rsvp import Rsvp
from eventhost.services import capacity_service, notification_service
from eventhost.services.event_access import (
    can_view,
    ensure_host,
    ensure_not_canceled,
    get_visible_event,
)

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "description", "date_time", "location", "max_guests", "image_url", "is_private")
REQUIRED_FIELDS = ("title", "date_time", "location", "max_guests", "is_private")


def create_event(db: Session, actor_id: str, data: dict[str, Any]) -> Event:
    """Create an event hosted by ``actor_id``."""
    event = Event(
        title=data["title"],
        description=data.get("description"),
        date_time=data["date_time"],
        location=data["location"],
        max_guests=data["max_guests"],
        image_url=data.get("image_url"),
        is_private=data.get("is_private", False),
        is_canceled=False,
        user_id=actor_id,
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    logger.info("Created event '%s' (%s) hosted by %s", event.title, event.id, actor_id)
    return event


def update_event(db: Session, event_id: str, actor_id: str, updates: dict[str, Any]) -> Event:
    """Apply a partial update, then notify every non-host RSVP holder."""
    with atomic(db):
        event = capacity_service.lock_event(db, event_id)
        if event is None or not can_view(db, event, actor_id):
            raise NotFoundError("Event not found")
        ensure_host(event, actor_id)
        ensure_not_canceled(event)

        new_max = updates.get("max_guests")
        if new_max is not None and new_max < event.max_guests:
            effective = capacity_service.effective_guest_count(db, event.id)
            if effective > new_max:
                raise CapacityExceededError(
                    effective, new_max, 0,
                    detail=f"Cannot lower max guests to {new_max}: {effective} spots are already reserved",
                )

        changed = []
        for field, value in updates.items():
            if field not in UPDATABLE_FIELDS or (value is None and field in REQUIRED_FIELDS):
                continue
            if getattr(event, field) != value:
                setattr(event, field, value)
                changed.append(field)

    db.refresh(event)
    if not changed:
        logger.debug("Event %s unchanged; no update sent", event_id)
        return event

    logger.info("Updated event %s (%s)", event_id, ", ".join(sorted(changed)))
    notification_service.notify_event_updated(db, event.id)
    return event


def cancel_event(db: Session, event_id: str, actor_id: str) -> Event:
    """Mark the event canceled and tell every RSVP holder."""
    with atomic(db):
        event = capacity_service.lock_event(db, event_id)
        if event is None or not can_view(db, event, actor_id):
            raise NotFoundError("Event not found")
        ensure_host(event, actor_id, "cancel this event")
        if event.is_canceled:
            raise EventCanceledError("Cannot cancel a canceled event")
        event.is_canceled = True

    db.refresh(event)
    logger.info("Canceled event %s", event_id)
    notification_service.notify_event_canceled(db, event.id)
    return event


def delete_event(db: Session, event_id: str, actor_id: str) -> None:
    """Delete the event together with its RSVPs, comments and notifications."""
    with atomic(db):
        event = get_visible_event(db, event_id, actor_id)
        ensure_host(event, actor_id, "delete this event")
        db.delete(event)
    logger.info("Deleted event %s", event_id)


def get_event(db: Session, event_id: str, actor_id: str) -> Event:
    return get_visible_event(db, event_id, actor_id)


def list_events(db: Session, actor_id: str) -> list[Event]:
    """Events the user hosts or is invited to, soonest first."""
    return (
        db.query(Event)
        .filter((Event.user_id == actor_id) | Event.rsvps.any(Rsvp.invitee_id == actor_id))
        .order_by(Event.date_time)
        .all()
    )


def list_hosting_events(db: Session, actor_id: str) -> list[Event]:
    return db.query(Event).filter(Event.user_id == actor_id).order_by(Event.date_time).all()


def list_attending_events(db: Session, actor_id: str) -> list[Event]:
    return (
        db.query(Event)
        .filter(Event.rsvps.any(Rsvp.invitee_id == actor_id), Event.user_id != actor_id)
        .order_by(Event.date_time)
        .all()
    )


def list_public_events(db: Session, include_canceled: bool = False) -> list[Event]:
    query = db.query(Event).filter(Event.is_private.is_(False))
    if not include_canceled:
        query = query.filter(Event.is_canceled.is_(False))
    return query.order_by(Event.date_time).all()
