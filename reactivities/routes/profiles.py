"""
Profile routes: profiles, followings, user activities and photos.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..auth import get_current_user, get_required_user
from ..database import get_db
from ..models.user import User
from ..photo_store import PhotoStore, get_photo_store
from ..responses import unwrap
from ..schemas.profile import (
    PhotoCreate,
    PhotoResponse,
    ProfileResponse,
    ProfileUpdate,
    UserActivityResponse,
)
from ..services import profiles as handlers

router = APIRouter(prefix="/api/profiles", tags=["profiles"])


# Photo routes are declared before /{user_id} so "photos" is not read as a user id

@router.post("/photos", response_model=PhotoResponse)
def add_photo(
    photo_data: PhotoCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    """Register a photo already uploaded to the asset store."""
    return unwrap(handlers.add_photo(db, current_user, photo_data))


@router.post("/photos/{photo_id}/set-main", response_model=PhotoResponse)
def set_main_photo(
    photo_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    return unwrap(handlers.set_main_photo(db, current_user, photo_id))


@router.delete("/photos/{photo_id}")
def delete_photo(
    photo_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
    store: PhotoStore = Depends(get_photo_store),
):
    """Delete one of the current user's photos (not the main one)."""
    unwrap(handlers.delete_photo(db, current_user, photo_id, store))
    return {"message": "Photo deleted"}


@router.put("", response_model=ProfileResponse)
def edit_profile(
    profile_data: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    return unwrap(handlers.edit_profile(db, current_user, profile_data))


@router.get("/{user_id}", response_model=ProfileResponse)
def get_profile(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user),
):
    return unwrap(handlers.get_profile(db, user_id, current_user.id if current_user else None))


@router.post("/{user_id}/follow")
def follow_toggle(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    """Follow the user, or unfollow when already following."""
    following = unwrap(handlers.follow_toggle(db, current_user, user_id))
    return {"following": following}


@router.get("/{user_id}/follow-list", response_model=List[ProfileResponse])
def get_follow_list(
    user_id: str,
    predicate: str = Query(default="followers"),
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user),
):
    return unwrap(handlers.get_follow_list(
        db, user_id, predicate, current_user.id if current_user else None
    ))


@router.get("/{user_id}/activities", response_model=List[UserActivityResponse])
def get_user_activities(
    user_id: str,
    filter: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """Activities the user attends: past, hosting or future."""
    return unwrap(handlers.get_user_activities(db, user_id, filter))


@router.get("/{user_id}/photos", response_model=List[PhotoResponse])
def get_photos(user_id: str, db: Session = Depends(get_db)):
    return unwrap(handlers.get_photos(db, user_id))
