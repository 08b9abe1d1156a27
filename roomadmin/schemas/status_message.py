from typing import Optional

from pydantic import BaseModel, field_validator


class StatusMessageUpdate(BaseModel):
    message: str

    @field_validator("message")
    @classmethod
    def check_message(cls, value):
        value = (value or "").strip()
        if not value:
            raise ValueError("Status message cannot be empty")
        return value

    def check_length(self, limit: int):
        if len(self.message) > limit:
            raise ValueError(f"Status message cannot exceed {limit} characters")


class StatusMessageResponse(BaseModel):
    id: str
    message: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
