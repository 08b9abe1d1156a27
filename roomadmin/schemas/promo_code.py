from datetime import date
from typing import Optional

from pydantic import BaseModel, field_validator

from roomadmin.utils.session_window import Clock, is_promo_code_active
from roomadmin.utils.validation_helpers import validate_promo_code, validate_required_text


class PromoCodeBase(BaseModel):
    influencer_id: str
    discount_amount: int = 20
    max_uses: int = 50
    expiry_date: Optional[date] = None

    @field_validator("influencer_id")
    @classmethod
    def check_influencer(cls, value):
        return validate_required_text(value, "Influencer ID").strip()

    @field_validator("discount_amount")
    @classmethod
    def check_discount(cls, value):
        if value <= 0:
            raise ValueError("Discount amount must be greater than 0")
        return value

    @field_validator("max_uses")
    @classmethod
    def check_max_uses(cls, value):
        if value < 1:
            raise ValueError("Maximum uses must be at least 1")
        return value

    def to_store_row(self) -> dict:
        row = self.model_dump()
        row["expiry_date"] = self.expiry_date.isoformat() if self.expiry_date else None
        return row


class PromoCodeCreate(PromoCodeBase):
    code: str

    @field_validator("code")
    @classmethod
    def check_code(cls, value):
        return validate_promo_code(value)

    def to_store_row(self) -> dict:
        row = super().to_store_row()
        if row["expiry_date"] is None:
            del row["expiry_date"]
        return row


class PromoCodeUpdate(PromoCodeBase):
    pass


class PromoCodeResponse(BaseModel):
    id: str
    code: str
    influencer_id: Optional[str] = None
    discount_amount: int
    max_uses: int
    total_uses: int = 0
    expiry_date: Optional[str] = None
    created_at: Optional[str] = None
    is_active: bool
    status: str

    @classmethod
    def from_row(cls, row: dict, clock: Clock) -> "PromoCodeResponse":
        active = is_promo_code_active(row, clock)
        fields = {key: value for key, value in row.items() if key in cls.model_fields}
        fields.update(
            total_uses=row.get("total_uses") or 0,
            is_active=active,
            status="active" if active else "expired",
        )
        return cls(**fields)
