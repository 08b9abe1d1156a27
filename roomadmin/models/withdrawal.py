from sqlalchemy import Column, DateTime, Float, String, Text
from roomadmin.db import Base
from roomadmin.models.room import new_id, utcnow


class InfluencerWithdrawal(Base):
    __tablename__ = "influencer_withdrawals"

    id = Column(String(36), primary_key=True, default=new_id)
    influencer_id = Column(String, index=True, nullable=False)
    amount = Column(Float, nullable=True)
    amount_withdrawn = Column(Float, nullable=True)
    status = Column(String, nullable=False, default="pending")
    payment_method = Column(String, nullable=True)
    requested_at = Column(DateTime, nullable=False, default=utcnow)
    paid_at = Column(DateTime, nullable=True)
    notes = Column(Text, nullable=True)


class InfluencerBalance(Base):
    __tablename__ = "influencer_balances"

    id = Column(String(36), primary_key=True, default=new_id)
    influencer_id = Column(String, unique=True, index=True, nullable=False)
    total_earned = Column(Float, nullable=False, default=0)
    total_paid = Column(Float, nullable=False, default=0)
    last_updated = Column(DateTime, nullable=False, default=utcnow)
