from sqlalchemy import Column, DateTime, String
from roomadmin.db import Base
from roomadmin.models.room import new_id, utcnow


class StatusMessage(Base):
    __tablename__ = "status_message"

    id = Column(String(36), primary_key=True, default=new_id)
    message = Column(String, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)
