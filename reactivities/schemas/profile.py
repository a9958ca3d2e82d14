from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ProfileResponse(BaseModel):
    id: str
    display_name: str
    bio: Optional[str] = None
    image_url: Optional[str] = None
    followers_count: int = 0
    following_count: int = 0
    following: bool = False  # whether the caller follows this user


class ProfileUpdate(BaseModel):
    display_name: str = Field(min_length=1, max_length=100)
    bio: Optional[str] = None


class UserActivityResponse(BaseModel):
    id: str
    title: str
    category: str
    date: datetime

    class Config:
        from_attributes = True


class PhotoCreate(BaseModel):
    """An image already uploaded to the asset store."""
    url: str = Field(min_length=1, max_length=500)
    public_id: str = Field(min_length=1, max_length=255)


class PhotoResponse(BaseModel):
    id: str
    url: str
    public_id: str
    is_main: bool = False
