"""RSVP mutation service — enforces the guest cap on every write.

Every admission runs as one unit of work: lock the event row, count the
capacity-consuming RSVPs, write, commit. Nothing is written when the cap would
be exceeded. Notifications are sent only after the commit and can never undo
or fail the RSVP write.
"""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from eventhost.database import atomic
from eventhost.exceptions import (
    AlreadyInvitedError,
    ForbiddenError,
    NotFoundError,
    PublicEventInviteError,
    ValidationError,
)
from eventhost.models.event import Event
from eventhost.models.rsvp import Rsvp, RsvpStatus
from eventhost.models.user import User
from eventhost.services import capacity_service, notification_service, rsvp_workflow
from eventhost.services.event_access import (
    can_view,
    ensure_host,
    ensure_not_canceled,
    find_event_by_id,
    get_visible_event,
)

logger = logging.getLogger(__name__)

CANCELED_INVITE_DETAIL = "Cannot invite guests to a canceled event"


def _lock_visible_event(db: Session, event_id: str, actor_id: str) -> Event:
    event = capacity_service.lock_event(db, event_id)
    if event is None or not can_view(db, event, actor_id):
        raise NotFoundError("Event not found")
    return event


def _ensure_may_create(event: Event, invitee_id: str, actor_id: str) -> None:
    """Hosts invite others; everyone else may only RSVP for themselves on public events."""
    if event.user_id == actor_id:
        if invitee_id == actor_id:
            raise ValidationError("You cannot invite yourself to your own event")
        return
    if invitee_id != actor_id:
        raise ForbiddenError("Only the host may invite other users")
    if event.is_private:
        raise ForbiddenError("This event is invite-only")


def _flush_new_rsvps(db: Session) -> None:
    try:
        db.flush()
    except IntegrityError as exc:
        # A concurrent request invited the same user first.
        raise AlreadyInvitedError() from exc


def create_rsvp(
    db: Session,
    event_id: str,
    invitee_id: str,
    actor_id: str,
    status: RsvpStatus = RsvpStatus.PENDING,
) -> Rsvp:
    """Create a single RSVP, checking capacity when ``status`` holds a spot."""
    with atomic(db):
        event = _lock_visible_event(db, event_id, actor_id)
        ensure_not_canceled(event, CANCELED_INVITE_DETAIL)
        _ensure_may_create(event, invitee_id, actor_id)

        if db.query(User.id).filter(User.id == invitee_id).first() is None:
            raise ValidationError(f"User {invitee_id} not found")
        existing = (
            db.query(Rsvp.id)
            .filter(Rsvp.event_id == event.id, Rsvp.invitee_id == invitee_id)
            .first()
        )
        if existing is not None:
            raise AlreadyInvitedError()

        if rsvp_workflow.consumes_capacity(status):
            capacity_service.ensure_capacity(db, event, 1)

        rsvp = Rsvp(event_id=event.id, invitee_id=invitee_id, user_id=actor_id, status=status)
        db.add(rsvp)
        _flush_new_rsvps(db)

    db.refresh(rsvp)
    logger.info("Created RSVP %s (%s) for user %s on event %s", rsvp.id, status.value, invitee_id, event_id)

    if invitee_id != actor_id:
        notification_service.notify_new_rsvps(db, event_id, [rsvp])
    return rsvp


def create_multiple_rsvps(db: Session, event_id: str, invitee_ids: list[str], actor_id: str) -> list[Rsvp]:
    """Invite several users to a private event in one all-or-nothing batch.

    The host's own id, repeated ids and users who already hold an RSVP are
    skipped silently. The remaining invitees either all get a PENDING RSVP or,
    when they do not all fit, none do.
    """
    with atomic(db):
        event = _lock_visible_event(db, event_id, actor_id)
        ensure_host(event, actor_id, "send invites")
        if not event.is_private:
            raise PublicEventInviteError()
        ensure_not_canceled(event, CANCELED_INVITE_DETAIL)

        candidates: list[str] = []
        for invitee_id in invitee_ids:
            if invitee_id != actor_id and invitee_id not in candidates:
                candidates.append(invitee_id)

        new_ids: list[str] = []
        if candidates:
            known = {uid for (uid,) in db.query(User.id).filter(User.id.in_(candidates)).all()}
            unknown = [uid for uid in candidates if uid not in known]
            if unknown:
                raise ValidationError(f"Unknown users: {', '.join(unknown)}")

            already_invited = {
                uid for (uid,) in db.query(Rsvp.invitee_id)
                .filter(Rsvp.event_id == event.id, Rsvp.invitee_id.in_(candidates))
                .all()
            }
            new_ids = [uid for uid in candidates if uid not in already_invited]

        rsvps = [
            Rsvp(event_id=event.id, invitee_id=uid, user_id=actor_id, status=RsvpStatus.PENDING)
            for uid in new_ids
        ]
        if rsvps:
            capacity_service.ensure_capacity(db, event, len(rsvps))
            db.add_all(rsvps)
            _flush_new_rsvps(db)

    logger.info(
        "Host %s invited %d of %d requested users to event %s",
        actor_id, len(rsvps), len(invitee_ids), event_id,
    )
    if rsvps:
        notification_service.notify_new_rsvps(db, event_id, rsvps)
    return rsvps


def update_rsvp_status(db: Session, rsvp_id: str, new_status: RsvpStatus, actor_id: str) -> Rsvp:
    """Move the invitee's RSVP to ``new_status``; leaving NO for a spot-holding status is capacity-gated."""
    changed = False
    with atomic(db):
        rsvp = db.query(Rsvp).filter(Rsvp.id == rsvp_id).first()
        if rsvp is None:
            raise NotFoundError("RSVP not found")

        event = capacity_service.lock_event(db, rsvp.event_id)
        if event is None or not can_view(db, event, actor_id):
            raise NotFoundError("RSVP not found")
        if rsvp.invitee_id != actor_id:
            raise ForbiddenError("Only the invitee may change this RSVP")
        ensure_not_canceled(event, "Cannot change an RSVP for a canceled event")

        # Re-read under the event lock.
        db.refresh(rsvp)
        previous = rsvp.status
        if previous != new_status:
            if rsvp_workflow.requires_capacity_check(previous, new_status):
                capacity_service.ensure_capacity(db, event, 1, exclude_rsvp_id=rsvp.id)
            rsvp.status = new_status
            changed = True

    db.refresh(rsvp)
    if not changed:
        logger.debug("RSVP %s already %s; nothing to update", rsvp_id, new_status.value)
        return rsvp

    logger.info("RSVP %s changed %s -> %s by user %s", rsvp_id, previous.value, new_status.value, actor_id)
    notification_service.notify_rsvp_updated(db, rsvp)
    return rsvp


def delete_rsvp(db: Session, rsvp_id: str, actor_id: str) -> None:
    """Remove an RSVP. Only the host or the invitee may do so; deletion only frees capacity."""
    with atomic(db):
        rsvp = db.query(Rsvp).filter(Rsvp.id == rsvp_id).first()
        if rsvp is None:
            raise NotFoundError("RSVP not found")
        event = find_event_by_id(db, rsvp.event_id)
        if event is None:
            raise NotFoundError("RSVP not found")
        if actor_id not in (rsvp.invitee_id, event.user_id):
            if not can_view(db, event, actor_id):
                raise NotFoundError("RSVP not found")
            raise ForbiddenError("Only the host or the invitee may remove this RSVP")
        db.delete(rsvp)
    logger.info("Deleted RSVP %s by user %s", rsvp_id, actor_id)


def get_rsvp(db: Session, rsvp_id: str, actor_id: str) -> Rsvp:
    """Return an RSVP visible to its invitee or the event host."""
    rsvp = db.query(Rsvp).filter(Rsvp.id == rsvp_id).first()
    if rsvp is None:
        raise NotFoundError("RSVP not found")
    event = find_event_by_id(db, rsvp.event_id)
    if event is None or actor_id not in (rsvp.invitee_id, event.user_id):
        raise NotFoundError("RSVP not found")
    return rsvp


def list_rsvps_for_invitee(db: Session, user_id: str, status: Optional[RsvpStatus] = None) -> list[Rsvp]:
    query = db.query(Rsvp).filter(Rsvp.invitee_id == user_id)
    if status is not None:
        query = query.filter(Rsvp.status == status)
    return query.order_by(Rsvp.created_at.desc(), Rsvp.id).all()


def list_rsvps_for_event(db: Session, event_id: str, actor_id: str) -> list[Rsvp]:
    event = get_visible_event(db, event_id, actor_id)
    return db.query(Rsvp).filter(Rsvp.event_id == event.id).order_by(Rsvp.created_at, Rsvp.id).all()
