"""RSVP status workflow.

PENDING, YES, MAYBE and NO may move to any other status. Only leaving NO for a
capacity-consuming status takes a spot, so that is the one transition gated on
capacity; switching among PENDING, YES and MAYBE never changes the reserved
count.
"""
from typing import Any

from sqlalchemy.orm import Session

from eventhost.exceptions import NotFoundError
from eventhost.models.rsvp import Rsvp, RsvpStatus, CAPACITY_CONSUMING_STATUSES
from eventhost.services import capacity_service
from eventhost.services.event_access import find_event_by_id


def consumes_capacity(status: RsvpStatus) -> bool:
    return status in CAPACITY_CONSUMING_STATUSES


def requires_capacity_check(current: RsvpStatus, new: RsvpStatus) -> bool:
    """True when the transition would take a spot the RSVP does not hold yet."""
    return not consumes_capacity(current) and consumes_capacity(new)


def transition_options(current: RsvpStatus, can_admit: bool) -> list[dict[str, Any]]:
    """Status buttons for an invitee, with the capacity-gated ones disabled when full."""
    return [
        {
            "status": status,
            "enabled": can_admit or not requires_capacity_check(current, status),
        }
        for status in RsvpStatus
        if status != current
    ]


def get_status_options(db: Session, rsvp_id: str, actor_id: str) -> dict[str, Any]:
    """Current status, live capacity and available transitions for the invitee's RSVP."""
    rsvp = db.query(Rsvp).filter(Rsvp.id == rsvp_id, Rsvp.invitee_id == actor_id).first()
    if rsvp is None:
        raise NotFoundError("RSVP not found")

    event = find_event_by_id(db, rsvp.event_id)
    if event is None:
        raise NotFoundError("Event not found")

    capacity = capacity_service.capacity_snapshot(db, event)
    options = [] if event.is_canceled else transition_options(rsvp.status, capacity["can_add_guests"])
    return {
        "rsvp_id": rsvp.id,
        "current_status": rsvp.status,
        "capacity": capacity,
        "options": options,
    }
