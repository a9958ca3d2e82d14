"""
Command and query handlers for profiles, followings and photos.
"""
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..database import save_changes, utcnow
from ..logging_config import db_logger, photo_logger
from ..models.activity import Activity
from ..models.activity_attendee import ActivityAttendee
from ..models.photo import Photo
from ..models.user import User
from ..models.user_following import UserFollowing
from ..photo_store import PhotoStore
from ..schemas.profile import (
    PhotoCreate,
    PhotoResponse,
    ProfileResponse,
    ProfileUpdate,
    UserActivityResponse,
)
from .result import Result

FOLLOW_PREDICATES = ("followers", "followings")


# ============================================================
# PROFILES
# ============================================================

def build_profiles(db: Session, users: List[User], current_user_id: Optional[str]) -> List[ProfileResponse]:
    """Profiles with follower counts and the caller's following flag, batched."""
    if not users:
        return []
    ids = [u.id for u in users]

    followers = dict(
        db.query(UserFollowing.target_id, func.count())
        .filter(UserFollowing.target_id.in_(ids))
        .group_by(UserFollowing.target_id)
        .all()
    )
    followings = dict(
        db.query(UserFollowing.observer_id, func.count())
        .filter(UserFollowing.observer_id.in_(ids))
        .group_by(UserFollowing.observer_id)
        .all()
    )
    followed = set()
    if current_user_id:
        followed = {
            target_id
            for (target_id,) in db.query(UserFollowing.target_id).filter(
                UserFollowing.observer_id == current_user_id,
                UserFollowing.target_id.in_(ids),
            )
        }

    return [
        ProfileResponse(
            id=u.id,
            display_name=u.display_name,
            bio=u.bio,
            image_url=u.image_url,
            followers_count=followers.get(u.id, 0),
            following_count=followings.get(u.id, 0),
            following=u.id in followed,
        )
        for u in users
    ]


def get_profile(db: Session, user_id: str, current_user_id: Optional[str]) -> Result:
    user = db.get(User, user_id)
    if not user:
        return Result.not_found("Profile not found")
    return Result.success(build_profiles(db, [user], current_user_id)[0])


def edit_profile(db: Session, user: User, data: ProfileUpdate) -> Result:
    user.display_name = data.display_name
    if data.bio is not None:
        user.bio = data.bio

    if not save_changes(db):
        return Result.not_saved("Failed to update profile")

    return Result.success(build_profiles(db, [user], user.id)[0])


# ============================================================
# FOLLOWING
# ============================================================

def find_following(db: Session, observer_id: str, target_id: str) -> Optional[UserFollowing]:
    return db.get(UserFollowing, (observer_id, target_id))


def follow_toggle(db: Session, observer: User, target_id: str) -> Result:
    """
    Follow the target when not following yet, otherwise unfollow.
    The value of the result is the new state (True = following).
    """
    target = db.get(User, target_id)
    if not target:
        return Result.not_found("Target user not found")
    if target.id == observer.id:
        return Result.invalid("You cannot follow yourself")

    following = find_following(db, observer.id, target.id)
    if following:
        db.delete(following)
    else:
        db.add(UserFollowing(observer_id=observer.id, target_id=target.id, date_followed=utcnow()))

    try:
        saved = save_changes(db)
    except IntegrityError:
        # Another toggle inserted the same row first; the pair is followed either way
        db.rollback()
        db_logger.warning("Following already recorded", observer_id=observer.id, target_id=target_id)
        return Result.success(True)

    if not saved:
        return Result.not_saved("Failed to update following")

    db_logger.info(
        "Following toggled",
        observer_id=observer.id,
        target_id=target_id,
        following=following is None,
    )
    return Result.success(following is None)


def get_follow_list(db: Session, user_id: str, predicate: str, current_user_id: Optional[str]) -> Result:
    """Users following ``user_id`` (followers) or followed by it (followings)."""
    if predicate not in FOLLOW_PREDICATES:
        return Result.invalid(f"Predicate must be one of: {', '.join(FOLLOW_PREDICATES)}")

    if predicate == "followers":
        query = db.query(User).join(UserFollowing, UserFollowing.observer_id == User.id).filter(
            UserFollowing.target_id == user_id
        )
    else:
        query = db.query(User).join(UserFollowing, UserFollowing.target_id == User.id).filter(
            UserFollowing.observer_id == user_id
        )

    users = query.order_by(UserFollowing.date_followed.asc()).all()
    return Result.success(build_profiles(db, users, current_user_id))


# ============================================================
# USER ACTIVITIES
# ============================================================

def get_user_activities(db: Session, user_id: str, filter: Optional[str] = None) -> Result:
    """
    Activities the user attends, oldest first.

    ``past``: dated now or earlier. ``hosting``: the user is the host.
    Any other value: dated now or later. No filter: everything.
    """
    query = (
        db.query(Activity)
        .join(ActivityAttendee, ActivityAttendee.activity_id == Activity.id)
        .filter(ActivityAttendee.user_id == user_id)
    )

    now = utcnow()
    if filter is not None:
        mode = filter.lower()
        if mode == "past":
            query = query.filter(Activity.date <= now)
        elif mode == "hosting":
            query = query.filter(ActivityAttendee.is_host.is_(True))
        else:
            query = query.filter(Activity.date >= now)

    activities = query.order_by(Activity.date.asc()).all()
    return Result.success([UserActivityResponse.model_validate(a) for a in activities])


# ============================================================
# PHOTOS
# ============================================================

def _photo_response(photo: Photo, owner: User) -> PhotoResponse:
    return PhotoResponse(
        id=photo.id,
        url=photo.url,
        public_id=photo.public_id,
        is_main=photo.url == owner.image_url,
    )


def _owned_photo(db: Session, owner: User, photo_id: str) -> Optional[Photo]:
    return db.query(Photo).filter(Photo.id == photo_id, Photo.user_id == owner.id).first()


def get_photos(db: Session, user_id: str) -> Result:
    user = db.get(User, user_id)
    if not user:
        return Result.not_found("Profile not found")
    photos = db.query(Photo).filter(Photo.user_id == user_id).order_by(Photo.created_at.asc()).all()
    return Result.success([_photo_response(p, user) for p in photos])


def add_photo(db: Session, owner: User, data: PhotoCreate) -> Result:
    """Record an uploaded photo; the first one becomes the profile image."""
    photo = Photo(url=data.url, public_id=data.public_id, user_id=owner.id)
    db.add(photo)
    if not owner.image_url:
        owner.image_url = photo.url

    if not save_changes(db):
        return Result.not_saved("Failed to add photo")

    photo_logger.info("Photo added", user_id=owner.id, photo_id=photo.id)
    return Result.success(_photo_response(photo, owner))


def set_main_photo(db: Session, owner: User, photo_id: str) -> Result:
    photo = _owned_photo(db, owner, photo_id)
    if not photo:
        return Result.not_found("Photo not found")

    owner.image_url = photo.url

    if not save_changes(db):
        return Result.not_saved("Failed to set main photo")

    return Result.success(_photo_response(photo, owner))


def delete_photo(db: Session, owner: User, photo_id: str, store: PhotoStore) -> Result:
    """Delete a non-main photo from the asset store and from the owner's set."""
    photo = _owned_photo(db, owner, photo_id)
    if not photo:
        return Result.not_found("Photo not found")

    if photo.url == owner.image_url:
        return Result.invalid("Cannot delete the main photo")

    deletion = store.delete_photo(photo.public_id)
    if not deletion.ok:
        return Result.not_saved(deletion.error or "Failed to delete photo from store", 500)

    db.delete(photo)
    if not save_changes(db):
        return Result.not_saved("Failed to delete photo", 500)

    photo_logger.info("Photo deleted", user_id=owner.id, photo_id=photo_id)
    return Result.success()
