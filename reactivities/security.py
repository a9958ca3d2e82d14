"""
Host authorization for mutating activity routes.
"""
from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from .auth import get_required_user
from .database import get_db
from .models.activity_attendee import ActivityAttendee
from .models.user import User
from .responses import forbidden


def is_host(db: Session, user_id: Optional[str], activity_id: Optional[str]) -> bool:
    """
    True only when the user has an attendee row for the activity with the
    host flag set. A missing row, including one for an activity that does
    not exist, is treated as "not the host".
    """
    if not user_id or not activity_id:
        return False
    attendee = db.get(ActivityAttendee, (user_id, activity_id))
    return bool(attendee and attendee.is_host)


def require_host(
    activity_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
) -> User:
    """Route dependency: 401 when anonymous, 403 unless the caller hosts the activity."""
    if not is_host(db, current_user.id, activity_id):
        forbidden("Only the host can modify this activity")
    return current_user
