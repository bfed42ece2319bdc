"""Event API routes — delegates to event_service for invariant enforcement."""
import logging
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from eventhost.auth import get_current_user
from eventhost.database import get_db
from eventhost.models.user import User
from eventhost.schemas.comment import CommentCreate, CommentOut
from eventhost.schemas.event import CapacityOut, EventCreate, EventOut, EventUpdate
from eventhost.schemas.rsvp import RsvpOut
from eventhost.services import capacity_service, comment_service, event_service, rsvp_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=EventOut, status_code=status.HTTP_201_CREATED)
def create_event(payload: EventCreate, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Create a new event hosted by the current user."""
    return event_service.create_event(db, actor_id=user.id, data=payload.model_dump())


@router.get("/", response_model=list[EventOut])
def list_events(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Events the current user hosts or is invited to."""
    return event_service.list_events(db, actor_id=user.id)


@router.get("/hosting", response_model=list[EventOut])
def list_hosting_events(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return event_service.list_hosting_events(db, actor_id=user.id)


@router.get("/attending", response_model=list[EventOut])
def list_attending_events(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return event_service.list_attending_events(db, actor_id=user.id)


@router.get("/public", response_model=list[EventOut])
def list_public_events(
    include_canceled: bool = Query(False),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return event_service.list_public_events(db, include_canceled=include_canceled)


@router.get("/{event_id}", response_model=EventOut)
def get_event(event_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Fetch a single event visible to the current user."""
    return event_service.get_event(db, event_id, actor_id=user.id)


@router.put("/{event_id}", response_model=EventOut)
def update_event(
    event_id: str,
    payload: EventUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Update an event (host only, rejected once canceled)."""
    updates = payload.model_dump(exclude_unset=True)
    return event_service.update_event(db, event_id, actor_id=user.id, updates=updates)


@router.post("/{event_id}/cancel", response_model=EventOut)
def cancel_event(event_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Cancel an event (host only) and notify every RSVP holder."""
    return event_service.cancel_event(db, event_id, actor_id=user.id)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(event_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    event_service.delete_event(db, event_id, actor_id=user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{event_id}/capacity", response_model=CapacityOut)
def check_event_capacity(
    event_id: str,
    additional_guests: int = Query(1, ge=1),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Live capacity: reserved spots, cap, free spots and whether more guests fit."""
    return capacity_service.check_event_capacity(db, event_id, actor_id=user.id, additional_guests=additional_guests)


@router.get("/{event_id}/rsvps", response_model=list[RsvpOut])
def list_event_rsvps(event_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return rsvp_service.list_rsvps_for_event(db, event_id, actor_id=user.id)


@router.post("/{event_id}/comments", response_model=CommentOut, status_code=status.HTTP_201_CREATED)
def create_comment(
    event_id: str,
    payload: CommentCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Comment on an event, mentioning users by email."""
    return comment_service.create_comment(
        db, event_id, actor_id=user.id, content=payload.content, mention_emails=payload.mentions,
    )


@router.get("/{event_id}/comments", response_model=list[CommentOut])
def list_comments(event_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return comment_service.list_comments_for_event(db, event_id, actor_id=user.id)
