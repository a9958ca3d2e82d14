"""
Directed follow relation between two users.
"""
from sqlalchemy import Column, String, ForeignKey, CheckConstraint
from ..database import Base, UTCDateTime, utcnow


class UserFollowing(Base):
    __tablename__ = "user_followings"
    __table_args__ = (
        CheckConstraint("observer_id <> target_id", name="ck_user_followings_no_self_follow"),
    )

    observer_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    target_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True)
    date_followed = Column(UTCDateTime, nullable=False, default=utcnow)
