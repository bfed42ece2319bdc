"""Notification API routes."""
import logging
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from eventhost.auth import get_current_user
from eventhost.database import get_db
from eventhost.models.user import User
from eventhost.schemas.notification import MarkReadOut, MarkReadRequest, NotificationOut
from eventhost.services import notification_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=list[NotificationOut])
def list_notifications(
    unread_only: bool = Query(False),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """The current user's notifications, newest first."""
    return notification_service.list_notifications(db, user.id, unread_only=unread_only)


@router.post("/mark-read", response_model=MarkReadOut)
def mark_notifications_as_read(
    payload: MarkReadRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Mark notifications read; ids belonging to other users are ignored."""
    return notification_service.mark_as_read(db, payload.notification_ids, user.id)


@router.get("/{notification_id}", response_model=NotificationOut)
def get_notification(notification_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return notification_service.get_notification(db, notification_id, user.id)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_notification(notification_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    notification_service.delete_notification(db, notification_id, user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
