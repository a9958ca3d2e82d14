from .auth import UserCreate, UserLogin, UserResponse, TokenResponse, RefreshRequest
from .pagination import CursorPage
from .activity import ActivityCreate, ActivityUpdate, ActivityDetails, AttendeeProfile
from .comment import CommentCreate, CommentResponse
from .profile import (
    ProfileResponse,
    ProfileUpdate,
    UserActivityResponse,
    PhotoCreate,
    PhotoResponse,
)

__all__ = [
    "UserCreate", "UserLogin", "UserResponse", "TokenResponse", "RefreshRequest",
    "CursorPage",
    "ActivityCreate", "ActivityUpdate", "ActivityDetails", "AttendeeProfile",
    "CommentCreate", "CommentResponse",
    "ProfileResponse", "ProfileUpdate", "UserActivityResponse", "PhotoCreate", "PhotoResponse",
]
