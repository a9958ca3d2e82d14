"""
Comment model. Comments are append-only.
"""
from uuid import uuid4

from sqlalchemy import Column, String, Text, ForeignKey
from ..database import Base, UTCDateTime, utcnow


class Comment(Base):
    __tablename__ = "comments"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    activity_id = Column(String(36), ForeignKey("activities.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    body = Column(Text, nullable=False)
    created_at = Column(UTCDateTime, default=utcnow, index=True)
