from .auth import router as auth_router
from .activities import router as activities_router
from .profiles import router as profiles_router

__all__ = [
    "auth_router",
    "activities_router",
    "profiles_router",
]
