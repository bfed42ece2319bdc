"""User API routes."""
import logging
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from eventhost.config import settings
from eventhost.database import get_db
from eventhost.exceptions import ConflictError, NotFoundError
from eventhost.models.user import User
from eventhost.schemas.user import UserCreate, UserOut

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    """Register a user."""
    if db.query(User).filter(User.email == payload.email).first():
        raise ConflictError("Email already registered")
    user = User(**payload.model_dump())
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Created user %s (%s)", user.id, user.email)
    return user


@router.get("/", response_model=list[UserOut])
def list_users(db: Session = Depends(get_db)):
    """List all users."""
    return db.query(User).order_by(User.name).all()


@router.get("/search", response_model=list[UserOut])
def search_users(q: str = Query("", description="Part of an email address"), db: Session = Depends(get_db)):
    """Find invitees by partial email; short queries return nothing."""
    if len(q) < settings.MIN_EMAIL_SEARCH_LENGTH:
        return []
    return db.query(User).filter(User.email.contains(q, autoescape=True)).order_by(User.email).all()


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: str, db: Session = Depends(get_db)):
    """Fetch a single user by ID."""
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")
    return user
