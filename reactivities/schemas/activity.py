from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime


class ActivityBase(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    category: str = Field(min_length=1, max_length=50)
    date: datetime
    city: str = Field(min_length=1, max_length=100)
    venue: str = Field(min_length=1, max_length=200)
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)


class ActivityCreate(ActivityBase):
    pass


class ActivityUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    category: Optional[str] = Field(default=None, min_length=1, max_length=50)
    date: Optional[datetime] = None
    city: Optional[str] = Field(default=None, min_length=1, max_length=100)
    venue: Optional[str] = Field(default=None, min_length=1, max_length=200)
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)

    @field_validator("title", "category", "date", "city", "venue")
    @classmethod
    def required_fields_not_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not set to null")
        return value


class AttendeeProfile(BaseModel):
    id: str
    display_name: str
    bio: Optional[str] = None
    image_url: Optional[str] = None
    is_host: bool = False
    following: bool = False  # whether the caller follows this attendee


class ActivityDetails(ActivityBase):
    id: str
    host_id: Optional[str] = None
    host_display_name: Optional[str] = None
    is_going: bool = False
    is_host: bool = False
    attendees: List[AttendeeProfile] = []
