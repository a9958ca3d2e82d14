"""
User model for authentication and profiles.
"""
from uuid import uuid4

from sqlalchemy import Column, String, Text, Boolean
from ..database import Base, UTCDateTime, utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    display_name = Column(String(100), nullable=False)
    bio = Column(Text, nullable=True)
    image_url = Column(String(500), nullable=True)  # url of the main Photo
    is_active = Column(Boolean, default=True)
    created_at = Column(UTCDateTime, default=utcnow)
