"""
Activity model for events users can host and attend.
"""
from uuid import uuid4

from sqlalchemy import Column, String, Text, Float
from ..database import Base, UTCDateTime, utcnow


class Activity(Base):
    __tablename__ = "activities"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(50), nullable=False, index=True)  # drinks, culture, film, food, music, travel
    date = Column(UTCDateTime, nullable=False, index=True)
    city = Column(String(100), nullable=False)
    venue = Column(String(200), nullable=False)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    created_at = Column(UTCDateTime, default=utcnow)
