"""
Date and time rules for room sessions.

All screens take "today" and "now" from one injected ``Clock`` so a room can
never be today's in one view and tomorrow's in another.
"""
from datetime import date, datetime, timedelta, timezone, tzinfo
from enum import Enum
from typing import Optional
from zoneinfo import ZoneInfo

DATE_OPTIONS = {
    "today": 0,
    "tomorrow": 1,
    "day_after_tomorrow": 2,
}


class RoomStatus(str, Enum):
    INACTIVE = "inactive"
    FULL = "full"
    ACTIVE = "active"


def resolve_timezone(name: str) -> tzinfo:
    if not name or name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


class Clock:
    def __init__(self, tz: str = "UTC"):
        self.tz = resolve_timezone(tz)

    def now(self) -> datetime:
        return datetime.now(self.tz)

    def today(self) -> str:
        return self.now().date().isoformat()

    def session_date(self, option: str) -> str:
        """Turn a date option (today / tomorrow / day_after_tomorrow) into YYYY-MM-DD."""
        if option not in DATE_OPTIONS:
            raise ValueError(f"Unknown date option: {option}")
        return (self.now().date() + timedelta(days=DATE_OPTIONS[option])).isoformat()

    def date_option_for(self, session_date: Optional[str]) -> Optional[str]:
        if not session_date:
            return None
        for option in DATE_OPTIONS:
            if self.session_date(option) == session_date:
                return option
        return None


class FixedClock(Clock):
    """Clock pinned to one instant; used for replaying a moment in time."""

    def __init__(self, moment: datetime):
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        self.tz = moment.tzinfo
        self.moment = moment

    def now(self) -> datetime:
        return self.moment


def parse_time_of_day(value: Optional[str], tz: Optional[tzinfo] = None) -> Optional[int]:
    """
    Minutes since midnight for a stored session time.

    Accepts a time-of-day string (``HH:MM`` or ``HH:MM:SS``) or a full ISO
    datetime; datetimes are converted to ``tz`` when both are timezone aware.
    Returns None for anything unparseable.
    """
    if not value:
        return None
    try:
        if "T" in value:
            moment = datetime.fromisoformat(value.replace("Z", "+00:00"))
            if tz is not None and moment.tzinfo is not None:
                moment = moment.astimezone(tz)
            return moment.hour * 60 + moment.minute
        parts = [int(part) for part in value.split(":")]
    except ValueError:
        return None
    if len(parts) < 2 or not (0 <= parts[0] < 24 and 0 <= parts[1] < 60):
        return None
    return parts[0] * 60 + parts[1]


def format_time_for_store(value: str) -> str:
    """HH:MM -> HH:MM:SS as the store's TIME columns expect."""
    hours, minutes = (int(part) for part in value.split(":")[:2])
    return f"{hours:02d}:{minutes:02d}:00"


def format_12_hour(minutes: int) -> str:
    hours, minute = divmod(minutes, 60)
    suffix = "PM" if hours >= 12 else "AM"
    hours = hours % 12 or 12
    return f"{hours}:{minute:02d} {suffix}"


def format_session_time(room: dict, clock: Clock) -> str:
    start = parse_time_of_day(room.get("session_start_time"), clock.tz)
    end = parse_time_of_day(room.get("session_end_time"), clock.tz)
    if not room.get("session_start_time") or not room.get("session_end_time"):
        return "No session scheduled"
    if start is None or end is None:
        return "Invalid session time"

    session_date = room.get("session_date")
    if not session_date or session_date == clock.today():
        day = "Today"
    elif session_date == clock.session_date("tomorrow"):
        day = "Tomorrow"
    else:
        try:
            day = date.fromisoformat(session_date).strftime("%a, %b %d")
        except ValueError:
            day = session_date
    return f"{day}, {format_12_hour(start)} - {format_12_hour(end)}"


def classify_room(room: dict, clock: Clock) -> RoomStatus:
    """
    Label a room inactive, full or active at the clock's current time.

    A room is active only when it is dated today and the current minute falls
    inside [start, end], both ends inclusive. Outside that window it is
    inactive even when over capacity.
    """
    now = clock.now()
    start = parse_time_of_day(room.get("session_start_time"), clock.tz)
    end = parse_time_of_day(room.get("session_end_time"), clock.tz)

    in_session = False
    if start is not None and end is not None:
        is_today = room.get("session_date") == clock.today()
        current = now.hour * 60 + now.minute
        in_session = is_today and start <= current <= end

    if not in_session:
        return RoomStatus.INACTIVE
    if (room.get("current_users") or 0) >= (room.get("max_users") or 0):
        return RoomStatus.FULL
    return RoomStatus.ACTIVE


def is_room_full(room: dict) -> bool:
    return (room.get("current_users") or 0) >= (room.get("max_users") or 0)


def is_promo_code_active(promo_code: dict, clock: Clock) -> bool:
    """
    Active while uses remain and the expiry, if any, is still ahead.

    A bare expiry date counts as midnight of that day, so a code expiring today
    is already expired. An unreadable expiry counts as expired.
    """
    if (promo_code.get("total_uses") or 0) >= (promo_code.get("max_uses") or 0):
        return False
    expiry = promo_code.get("expiry_date")
    if not expiry:
        return True
    expiry = str(expiry)
    try:
        expires_at = datetime.fromisoformat(expiry.replace("Z", "+00:00"))
    except ValueError:
        return False
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=clock.tz)
    return expires_at > clock.now()
