"""Request principal resolution."""
import logging
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from eventhost.database import get_db
from eventhost.exceptions import UnauthenticatedError
from eventhost.models.user import User

logger = logging.getLogger(__name__)


def get_current_user(
    x_user_id: Optional[str] = Header(None),
    db: Session = Depends(get_db),
) -> User:
    """Return the user named by the ``X-User-Id`` header."""
    if not x_user_id:
        raise UnauthenticatedError()

    user = db.query(User).filter(User.id == x_user_id).first()
    if user is None:
        logger.warning("Rejected request for unknown user %s", x_user_id)
        raise UnauthenticatedError("Unknown user")
    return user
