"""
Command and query handlers for activities, attendance and comments.
"""
from collections import defaultdict
from datetime import datetime
from typing import List, Optional

from sqlalchemy import and_, exists, false, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..database import save_changes, utcnow
from ..logging_config import db_logger, timed
from ..models.activity import Activity
from ..models.activity_attendee import ActivityAttendee
from ..models.comment import Comment
from ..models.user import User
from ..models.user_following import UserFollowing
from ..schemas.activity import ActivityCreate, ActivityDetails, ActivityUpdate, AttendeeProfile
from ..schemas.comment import CommentResponse
from ..schemas.pagination import CursorPage
from .result import Result

FILTER_GOING = "isGoing"
FILTER_HOST = "isHost"


# ============================================================
# PROJECTION
# ============================================================

def project_activities(
    db: Session,
    activities: List[Activity],
    current_user_id: Optional[str],
) -> List[ActivityDetails]:
    """
    Build ActivityDetails for a batch of activities with the caller's
    going/host flags. Attendees for the whole batch come from one query.
    """
    if not activities:
        return []

    rows = (
        db.query(ActivityAttendee, User)
        .join(User, User.id == ActivityAttendee.user_id)
        .filter(ActivityAttendee.activity_id.in_([a.id for a in activities]))
        .order_by(ActivityAttendee.date_joined.asc())
        .all()
    )

    followed = set()
    attendee_ids = {user.id for _, user in rows}
    if current_user_id and attendee_ids:
        followed = {
            target_id
            for (target_id,) in db.query(UserFollowing.target_id).filter(
                UserFollowing.observer_id == current_user_id,
                UserFollowing.target_id.in_(attendee_ids),
            )
        }

    attendees_by_activity = defaultdict(list)
    for attendee, user in rows:
        attendees_by_activity[attendee.activity_id].append(
            AttendeeProfile(
                id=user.id,
                display_name=user.display_name,
                bio=user.bio,
                image_url=user.image_url,
                is_host=attendee.is_host,
                following=user.id in followed,
            )
        )

    details = []
    for activity in activities:
        attendees = attendees_by_activity[activity.id]
        host = next((a for a in attendees if a.is_host), None)
        details.append(
            ActivityDetails(
                id=activity.id,
                title=activity.title,
                description=activity.description,
                category=activity.category,
                date=activity.date,
                city=activity.city,
                venue=activity.venue,
                latitude=activity.latitude,
                longitude=activity.longitude,
                host_id=host.id if host else None,
                host_display_name=host.display_name if host else None,
                is_going=current_user_id is not None and any(a.id == current_user_id for a in attendees),
                is_host=host is not None and host.id == current_user_id,
                attendees=attendees,
            )
        )
    return details


# ============================================================
# QUERIES
# ============================================================

def _attends(user_id: Optional[str], host_only: bool = False):
    """Correlated predicate: the user has an attendee row for the outer Activity."""
    if user_id is None:
        return false()
    conditions = [
        ActivityAttendee.activity_id == Activity.id,
        ActivityAttendee.user_id == user_id,
    ]
    if host_only:
        conditions.append(ActivityAttendee.is_host.is_(True))
    return exists().where(*conditions)


@timed(db_logger)
def list_activities(
    db: Session,
    current_user_id: Optional[str],
    page_size: int,
    cursor: Optional[datetime] = None,
    cursor_id: Optional[str] = None,
    start_date: Optional[datetime] = None,
    filter: Optional[str] = None,
) -> Result:
    """
    One page of the activity feed ordered by (date, id).

    Rows from ``cursor`` (inclusive) or ``start_date`` onwards are
    returned. One extra row is fetched; when present it becomes the next
    cursor and is left out of the page. An anonymous caller asking for
    isGoing/isHost gets an empty page.
    """
    query = db.query(Activity)

    if cursor is not None and cursor_id is not None:
        query = query.filter(
            or_(
                Activity.date > cursor,
                and_(Activity.date == cursor, Activity.id >= cursor_id),
            )
        )
    else:
        query = query.filter(Activity.date >= (cursor or start_date or utcnow()))

    if filter == FILTER_GOING:
        query = query.filter(_attends(current_user_id))
    elif filter == FILTER_HOST:
        query = query.filter(_attends(current_user_id, host_only=True))

    activities = (
        query.order_by(Activity.date.asc(), Activity.id.asc())
        .limit(page_size + 1)
        .all()
    )

    next_cursor = None
    next_cursor_id = None
    if len(activities) > page_size:
        extra = activities.pop()
        next_cursor, next_cursor_id = extra.date, extra.id

    return Result.success(
        CursorPage[ActivityDetails](
            items=project_activities(db, activities, current_user_id),
            next_cursor=next_cursor,
            next_cursor_id=next_cursor_id,
        )
    )


def get_activity_details(db: Session, activity_id: str, current_user_id: Optional[str]) -> Result:
    activity = db.get(Activity, activity_id)
    if not activity:
        return Result.not_found("Activity not found")
    return Result.success(project_activities(db, [activity], current_user_id)[0])


# ============================================================
# COMMANDS
# ============================================================

def create_activity(db: Session, host: User, data: ActivityCreate) -> Result:
    """Create an activity with the caller as its only host."""
    activity = Activity(**data.model_dump())
    db.add(activity)
    db.flush()

    db.add(ActivityAttendee(user_id=host.id, activity_id=activity.id, is_host=True))

    if not save_changes(db):
        return Result.not_saved("Failed to create activity")

    db_logger.info("Activity created", activity_id=activity.id, host_id=host.id)
    return Result.success(project_activities(db, [activity], host.id)[0])


def edit_activity(db: Session, activity_id: str, data: ActivityUpdate, current_user_id: str) -> Result:
    activity = db.get(Activity, activity_id)
    if not activity:
        return Result.not_found("Activity not found")

    # Explicit nulls clear optional fields; required ones are rejected by the schema
    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(activity, key, value)

    if not save_changes(db):
        return Result.not_saved("Failed to update activity")

    return Result.success(project_activities(db, [activity], current_user_id)[0])


def delete_activity(db: Session, activity_id: str) -> Result:
    """Delete an activity together with its attendee and comment rows."""
    activity = db.get(Activity, activity_id)
    if not activity:
        return Result.not_found("Activity not found")

    db.query(ActivityAttendee).filter(ActivityAttendee.activity_id == activity_id).delete(
        synchronize_session="fetch"
    )
    db.query(Comment).filter(Comment.activity_id == activity_id).delete(synchronize_session="fetch")
    db.delete(activity)
    db.commit()

    db_logger.info("Activity deleted", activity_id=activity_id)
    return Result.success()


def find_attendee(db: Session, user_id: str, activity_id: str) -> Optional[ActivityAttendee]:
    return db.get(ActivityAttendee, (user_id, activity_id))


def update_attendance(db: Session, activity_id: str, user: User) -> Result:
    """
    Toggle the caller's attendance. The host cannot leave, which keeps
    exactly one host per activity.
    """
    activity = db.get(Activity, activity_id)
    if not activity:
        return Result.not_found("Activity not found")

    attendee = find_attendee(db, user.id, activity_id)
    if attendee and attendee.is_host:
        return Result.invalid("The host cannot leave their own activity")

    if attendee:
        db.delete(attendee)
    else:
        db.add(ActivityAttendee(user_id=user.id, activity_id=activity_id, is_host=False))

    try:
        saved = save_changes(db)
    except IntegrityError:
        # A concurrent request already added this attendee row
        db.rollback()
        db_logger.warning("Attendance already recorded", activity_id=activity_id, user_id=user.id)
        saved = True

    if not saved:
        return Result.not_saved("Failed to update attendance")

    db_logger.info(
        "Attendance updated",
        activity_id=activity_id,
        user_id=user.id,
        going=attendee is None,
    )
    return Result.success(project_activities(db, [activity], user.id)[0])


# ============================================================
# COMMENTS
# ============================================================

def _comment_response(comment: Comment, author: User) -> CommentResponse:
    return CommentResponse(
        id=comment.id,
        body=comment.body,
        created_at=comment.created_at,
        user_id=author.id,
        display_name=author.display_name,
        image_url=author.image_url,
    )


def add_comment(db: Session, activity_id: str, author: User, body: str) -> Result:
    activity = db.get(Activity, activity_id)
    if not activity:
        return Result.not_found("Could not find activity")

    comment = Comment(activity_id=activity.id, user_id=author.id, body=body)
    db.add(comment)

    try:
        saved = save_changes(db)
    except IntegrityError:
        db.rollback()
        saved = False

    if not saved:
        db.rollback()
        db_logger.warning("Comment not saved", activity_id=activity_id, user_id=author.id)
        return Result.not_saved("Failed to add comment")

    db_logger.info("Comment added", activity_id=activity_id, comment_id=comment.id)
    return Result.success(_comment_response(comment, author))


def get_comments(db: Session, activity_id: str) -> Result:
    """Comments for an activity, newest first."""
    if not db.get(Activity, activity_id):
        return Result.not_found("Could not find activity")

    rows = (
        db.query(Comment, User)
        .join(User, User.id == Comment.user_id)
        .filter(Comment.activity_id == activity_id)
        .order_by(Comment.created_at.desc())
        .all()
    )
    return Result.success([_comment_response(comment, author) for comment, author in rows])
