"""RSVP API routes — invites, status changes and the capacity gate."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from eventhost.auth import get_current_user
from eventhost.database import get_db
from eventhost.models.rsvp import RsvpStatus
from eventhost.models.user import User
from eventhost.schemas.rsvp import (
    RsvpBulkCreate,
    RsvpBulkOut,
    RsvpCreate,
    RsvpOut,
    RsvpUpdate,
    StatusOptionsOut,
)
from eventhost.services import rsvp_service, rsvp_workflow

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=RsvpOut, status_code=status.HTTP_201_CREATED)
def create_rsvp(payload: RsvpCreate, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Invite a user (host) or RSVP to a public event (self)."""
    return rsvp_service.create_rsvp(
        db, payload.event_id, payload.invitee_id, actor_id=user.id, status=payload.status,
    )


@router.post("/bulk", response_model=RsvpBulkOut, status_code=status.HTTP_201_CREATED)
def create_multiple_rsvps(
    payload: RsvpBulkCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Invite several users to a private event, all or nothing."""
    rsvps = rsvp_service.create_multiple_rsvps(db, payload.event_id, payload.invitee_ids, actor_id=user.id)
    return {"count": len(rsvps), "rsvps": rsvps}


@router.get("/", response_model=list[RsvpOut])
def list_my_rsvps(
    status_filter: Optional[RsvpStatus] = Query(None, alias="status"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """RSVPs addressed to the current user."""
    return rsvp_service.list_rsvps_for_invitee(db, user.id, status=status_filter)


@router.get("/{rsvp_id}", response_model=RsvpOut)
def get_rsvp(rsvp_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return rsvp_service.get_rsvp(db, rsvp_id, actor_id=user.id)


@router.get("/{rsvp_id}/status-options", response_model=StatusOptionsOut)
def get_status_options(rsvp_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Which status buttons the invitee may use right now."""
    return rsvp_workflow.get_status_options(db, rsvp_id, actor_id=user.id)


@router.patch("/{rsvp_id}", response_model=RsvpOut)
def update_rsvp(
    rsvp_id: str,
    payload: RsvpUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Change the invitee's RSVP status (capacity-gated when leaving NO)."""
    return rsvp_service.update_rsvp_status(db, rsvp_id, payload.status, actor_id=user.id)


@router.delete("/{rsvp_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_rsvp(rsvp_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    rsvp_service.delete_rsvp(db, rsvp_id, actor_id=user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
