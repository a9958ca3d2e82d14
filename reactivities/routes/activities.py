"""
Activity routes: feed, details, CRUD, attendance and comments.
"""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..auth import get_current_user, get_required_user
from ..config import get_settings
from ..database import get_db
from ..models.user import User
from ..responses import unwrap
from ..schemas.activity import ActivityCreate, ActivityDetails, ActivityUpdate
from ..schemas.comment import CommentCreate, CommentResponse
from ..schemas.pagination import CursorPage
from ..security import require_host
from ..services import activities as handlers

settings = get_settings()

router = APIRouter(prefix="/api/activities", tags=["activities"])


def _user_id(user: Optional[User]) -> Optional[str]:
    return user.id if user else None


@router.get("", response_model=CursorPage[ActivityDetails])
def list_activities(
    cursor: Optional[datetime] = None,
    cursor_id: Optional[str] = None,
    start_date: Optional[datetime] = None,
    page_size: int = Query(default=settings.default_page_size, ge=1, le=settings.max_page_size),
    filter: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user),
):
    """Cursor-paginated activity feed, optionally filtered to isGoing/isHost."""
    return unwrap(handlers.list_activities(
        db,
        _user_id(current_user),
        page_size=page_size,
        cursor=cursor,
        cursor_id=cursor_id,
        start_date=start_date,
        filter=filter,
    ))


@router.get("/{activity_id}", response_model=ActivityDetails)
def get_activity(
    activity_id: str,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user),
):
    return unwrap(handlers.get_activity_details(db, activity_id, _user_id(current_user)))


@router.post("", response_model=ActivityDetails)
def create_activity(
    activity_data: ActivityCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    """Create an activity hosted by the current user."""
    return unwrap(handlers.create_activity(db, current_user, activity_data))


@router.put("/{activity_id}", response_model=ActivityDetails)
def edit_activity(
    activity_id: str,
    activity_update: ActivityUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_host),
):
    """Edit an activity (host only)."""
    return unwrap(handlers.edit_activity(db, activity_id, activity_update, current_user.id))


@router.delete("/{activity_id}")
def delete_activity(
    activity_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_host),
):
    """Delete an activity (host only)."""
    unwrap(handlers.delete_activity(db, activity_id))
    return {"message": "Activity deleted"}


@router.post("/{activity_id}/attend", response_model=ActivityDetails)
def update_attendance(
    activity_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    """Join the activity, or leave it when already attending."""
    return unwrap(handlers.update_attendance(db, activity_id, current_user))


@router.get("/{activity_id}/comments", response_model=List[CommentResponse])
def get_comments(activity_id: str, db: Session = Depends(get_db)):
    return unwrap(handlers.get_comments(db, activity_id))


@router.post("/{activity_id}/comments", response_model=CommentResponse)
def add_comment(
    activity_id: str,
    comment_data: CommentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    return unwrap(handlers.add_comment(db, activity_id, current_user, comment_data.body))
