"""
Join table between users and the activities they attend.
"""
from sqlalchemy import Column, String, Boolean, ForeignKey, Index, text
from ..database import Base, UTCDateTime, utcnow


class ActivityAttendee(Base):
    __tablename__ = "activity_attendees"
    __table_args__ = (
        # One host per activity
        Index(
            "uq_activity_attendees_one_host",
            "activity_id",
            unique=True,
            sqlite_where=text("is_host = 1"),
            postgresql_where=text("is_host"),
        ),
    )

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    activity_id = Column(String(36), ForeignKey("activities.id", ondelete="CASCADE"), primary_key=True, index=True)
    is_host = Column(Boolean, nullable=False, default=False)
    date_joined = Column(UTCDateTime, nullable=False, default=utcnow)
