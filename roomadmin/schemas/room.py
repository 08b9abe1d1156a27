from typing import Literal, Optional

from pydantic import BaseModel, field_validator, model_validator

from roomadmin.utils.session_window import (
    Clock,
    RoomStatus,
    classify_room,
    format_session_time,
    format_time_for_store,
    is_room_full,
    parse_time_of_day,
)
from roomadmin.utils.validation_helpers import (
    validate_required_text,
    validate_time_format,
    validate_url,
)

DateOption = Literal["today", "tomorrow", "day_after_tomorrow"]


class RoomBase(BaseModel):
    name: str
    description: str
    url: str
    max_users: int = 100
    price_inr: float
    date_option: DateOption = "today"
    start_time: str = "09:00"
    end_time: str = "17:00"

    @field_validator("name")
    @classmethod
    def check_name(cls, value):
        return validate_required_text(value, "Room name").strip()

    @field_validator("description")
    @classmethod
    def check_description(cls, value):
        return validate_required_text(value, "Description").strip()

    @field_validator("url")
    @classmethod
    def check_url(cls, value):
        return validate_url(value)

    @field_validator("max_users")
    @classmethod
    def check_max_users(cls, value):
        if value < 1:
            raise ValueError("Max users must be at least 1")
        return value

    @field_validator("price_inr")
    @classmethod
    def check_price(cls, value):
        if value <= 0:
            raise ValueError("Price must be greater than 0")
        return value

    @field_validator("start_time", "end_time")
    @classmethod
    def check_time(cls, value):
        return validate_time_format(value)

    @model_validator(mode="after")
    def check_window(self):
        if parse_time_of_day(self.start_time) >= parse_time_of_day(self.end_time):
            raise ValueError("End time must be after start time")
        return self

    def to_store_row(self, clock: Clock) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "url": self.url,
            "max_users": self.max_users,
            "price_inr": self.price_inr,
            "session_date": clock.session_date(self.date_option),
            "session_start_time": format_time_for_store(self.start_time),
            "session_end_time": format_time_for_store(self.end_time),
        }


class RoomCreate(RoomBase):
    pass


class RoomUpdate(RoomBase):
    pass


class RoomResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    url: Optional[str] = None
    max_users: int
    current_users: int = 0
    price_inr: float
    session_date: Optional[str] = None
    session_start_time: Optional[str] = None
    session_end_time: Optional[str] = None
    created_at: Optional[str] = None
    date_option: Optional[str] = None
    status: RoomStatus
    session_time: str
    is_full: bool

    @classmethod
    def from_row(cls, row: dict, clock: Clock) -> "RoomResponse":
        fields = {key: value for key, value in row.items() if key in cls.model_fields}
        fields.update(
            current_users=row.get("current_users") or 0,
            date_option=clock.date_option_for(row.get("session_date")),
            status=classify_room(row, clock),
            session_time=format_session_time(row, clock),
            is_full=is_room_full(row),
        )
        return cls(**fields)
