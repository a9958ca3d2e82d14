from .user import User
from .activity import Activity
from .activity_attendee import ActivityAttendee
from .comment import Comment
from .user_following import UserFollowing
from .photo import Photo

__all__ = [
    "User",
    "Activity",
    "ActivityAttendee",
    "Comment",
    "UserFollowing",
    "Photo",
]
