from datetime import datetime, timedelta, timezone

import pytest

from roomadmin.utils.session_window import (
    FixedClock,
    RoomStatus,
    classify_room,
    format_session_time,
    format_time_for_store,
    is_promo_code_active,
    parse_time_of_day,
)

TODAY = "2025-06-02"


def at(hour, minute=0, tz=timezone.utc):
    return FixedClock(datetime(2025, 6, 2, hour, minute, tzinfo=tz))


def room(**overrides):
    data = {
        "session_date": TODAY,
        "session_start_time": "09:00:00",
        "session_end_time": "17:00:00",
        "current_users": 3,
        "max_users": 10,
    }
    data.update(overrides)
    return data


def test_room_active_inside_window():
    assert classify_room(room(), at(12)) == RoomStatus.ACTIVE


def test_room_inactive_after_window():
    assert classify_room(room(), at(20)) == RoomStatus.INACTIVE


def test_full_room_outside_window_is_inactive():
    assert classify_room(room(current_users=10), at(20)) == RoomStatus.INACTIVE


def test_full_room_inside_window_is_full():
    assert classify_room(room(current_users=10), at(12)) == RoomStatus.FULL
    assert classify_room(room(current_users=12), at(12)) == RoomStatus.FULL


@pytest.mark.parametrize("hour,minute,expected", [
    (9, 0, RoomStatus.ACTIVE),
    (17, 0, RoomStatus.ACTIVE),
    (8, 59, RoomStatus.INACTIVE),
    (17, 1, RoomStatus.INACTIVE),
])
def test_window_bounds_are_inclusive(hour, minute, expected):
    assert classify_room(room(), at(hour, minute)) == expected


def test_room_on_another_date_is_inactive():
    assert classify_room(room(session_date="2025-06-03"), at(12)) == RoomStatus.INACTIVE


def test_room_without_times_is_inactive():
    assert classify_room(room(session_start_time=None), at(12)) == RoomStatus.INACTIVE


def test_today_follows_clock_timezone():
    ist = timezone(timedelta(hours=5, minutes=30))
    # 20:00 UTC on the 1st is already the 2nd in IST.
    clock = FixedClock(datetime(2025, 6, 1, 20, 0, tzinfo=timezone.utc).astimezone(ist))
    assert clock.today() == TODAY
    late = room(session_start_time="01:00:00", session_end_time="02:00:00")
    assert classify_room(late, clock) == RoomStatus.ACTIVE


def test_parse_time_of_day_formats():
    assert parse_time_of_day("09:30:00") == 570
    assert parse_time_of_day("9:05") == 545
    assert parse_time_of_day("2025-06-02T14:15:00+00:00") == 855
    assert parse_time_of_day("25:00") is None
    assert parse_time_of_day("later") is None
    assert parse_time_of_day(None) is None


def test_format_time_for_store():
    assert format_time_for_store("9:05") == "09:05:00"
    assert format_time_for_store("17:00") == "17:00:00"


def test_session_dates_from_options():
    clock = at(12)
    assert clock.session_date("today") == "2025-06-02"
    assert clock.session_date("tomorrow") == "2025-06-03"
    assert clock.session_date("day_after_tomorrow") == "2025-06-04"
    assert clock.date_option_for("2025-06-03") == "tomorrow"
    assert clock.date_option_for("2025-07-01") is None
    with pytest.raises(ValueError):
        clock.session_date("next_week")


def test_format_session_time():
    clock = at(12)
    assert format_session_time(room(), clock) == "Today, 9:00 AM - 5:00 PM"
    assert format_session_time(room(session_date="2025-06-03"), clock) == "Tomorrow, 9:00 AM - 5:00 PM"
    assert format_session_time(room(session_end_time=None), clock) == "No session scheduled"
    assert format_session_time(room(session_end_time="late"), clock) == "Invalid session time"
    assert format_session_time(room(session_date="2025-06-10"), clock) == "Tue, Jun 10, 9:00 AM - 5:00 PM"
    assert format_session_time(room(session_date="2025-6-x"), clock) == "2025-6-x, 9:00 AM - 5:00 PM"


def test_promo_code_exhausted_is_inactive():
    code = {"code": "SAVE20", "max_uses": 50, "total_uses": 50, "expiry_date": None}
    assert not is_promo_code_active(code, at(12))


def test_promo_code_with_uses_left_is_active():
    code = {"code": "SAVE20", "max_uses": 50, "total_uses": 49, "expiry_date": None}
    assert is_promo_code_active(code, at(12))


def test_promo_code_expiry():
    code = {"code": "SAVE20", "max_uses": 50, "total_uses": 0}
    assert not is_promo_code_active({**code, "expiry_date": "2025-06-01"}, at(12))
    assert is_promo_code_active({**code, "expiry_date": "2025-06-10"}, at(12))
    assert not is_promo_code_active({**code, "expiry_date": TODAY}, at(0))
    assert not is_promo_code_active({**code, "expiry_date": TODAY}, at(12))
    assert is_promo_code_active({**code, "expiry_date": "2025-06-03"}, at(23, 59))
    assert not is_promo_code_active({**code, "expiry_date": "soon"}, at(12))
    assert not is_promo_code_active({**code, "expiry_date": "2025-06-02T11:00:00+00:00"}, at(12))
