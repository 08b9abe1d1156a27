from sqlalchemy import Column, DateTime, Integer, String
from roomadmin.db import Base
from roomadmin.models.room import new_id, utcnow


class PromoCode(Base):
    __tablename__ = "promo_codes"

    id = Column(String(36), primary_key=True, default=new_id)
    code = Column(String, unique=True, index=True, nullable=False)
    influencer_id = Column(String, nullable=False)
    discount_amount = Column(Integer, nullable=False)
    max_uses = Column(Integer, nullable=False)
    total_uses = Column(Integer, nullable=False, default=0)
    expiry_date = Column(String(10), nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
