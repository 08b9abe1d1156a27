from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from roomadmin.db import Base
from roomadmin.models.room import new_id, utcnow


class UserSession(Base):
    """A user's participation in a room; active while rewards_left > 0."""

    __tablename__ = "user_sessions"

    id = Column(String(36), primary_key=True, default=new_id)
    room_id = Column(String(36), ForeignKey("rooms.id"), index=True, nullable=False)
    user_id = Column(String, nullable=False)
    rewards_left = Column(Integer, nullable=False, default=0)
    last_updated = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
