"""
Photo model for profile images kept in the remote asset store.
"""
from uuid import uuid4

from sqlalchemy import Column, String, ForeignKey
from ..database import Base, UTCDateTime, utcnow


class Photo(Base):
    __tablename__ = "photos"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    url = Column(String(500), nullable=False)
    public_id = Column(String(255), nullable=False)  # asset id in the remote store
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(UTCDateTime, default=utcnow)
