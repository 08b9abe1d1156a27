import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, Float, Integer, String, Text
from roomadmin.db import Base


def new_id():
    return str(uuid.uuid4())


def utcnow():
    return datetime.now(timezone.utc)


class Room(Base):
    __tablename__ = "rooms"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, index=True, nullable=False)
    description = Column(Text, nullable=True)
    url = Column(String, nullable=True)
    max_users = Column(Integer, nullable=False, default=100)
    current_users = Column(Integer, nullable=False, default=0)
    price_inr = Column(Float, nullable=False, default=50)
    session_date = Column(String(10), index=True, nullable=True)
    session_start_time = Column(String, nullable=True)
    session_end_time = Column(String, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
