from typing import Optional

from pydantic import BaseModel, field_validator

from roomadmin.services.payouts import payout_amount


class PayRequest(BaseModel):
    notes: Optional[str] = None


class RejectRequest(BaseModel):
    notes: str

    @field_validator("notes")
    @classmethod
    def check_notes(cls, value):
        if not value or not value.strip():
            raise ValueError("A reason is required to reject a withdrawal")
        return value.strip()


class WithdrawalResponse(BaseModel):
    id: str
    influencer_id: str
    amount: Optional[float] = None
    amount_withdrawn: Optional[float] = None
    payout_amount: Optional[float] = None
    status: str
    payment_method: Optional[str] = None
    requested_at: Optional[str] = None
    paid_at: Optional[str] = None
    notes: Optional[str] = None

    @classmethod
    def from_row(cls, row: dict) -> "WithdrawalResponse":
        fields = {key: value for key, value in row.items() if key in cls.model_fields}
        fields["payout_amount"] = payout_amount(row)
        return cls(**fields)


class BalanceResponse(BaseModel):
    influencer_id: str
    total_earned: float = 0
    total_paid: float = 0
    last_updated: Optional[str] = None
