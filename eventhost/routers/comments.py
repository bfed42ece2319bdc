"""Comment and mention API routes."""
import logging
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from eventhost.auth import get_current_user
from eventhost.database import get_db
from eventhost.models.user import User
from eventhost.schemas.comment import CommentOut, CommentUpdate, MentionOut
from eventhost.services import comment_service

logger = logging.getLogger(__name__)
router = APIRouter()
mentions_router = APIRouter()


@router.put("/{comment_id}", response_model=CommentOut)
def update_comment(
    comment_id: str,
    payload: CommentUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Edit a comment (author only)."""
    return comment_service.update_comment(db, comment_id, actor_id=user.id, content=payload.content)


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_comment(comment_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    comment_service.delete_comment(db, comment_id, actor_id=user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@mentions_router.get("/", response_model=list[MentionOut])
def list_my_mentions(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Mentions of the current user."""
    return comment_service.list_mentions_for_user(db, user.id)
