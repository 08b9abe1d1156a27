import re
from datetime import date
from urllib.parse import urlparse


TIME_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")
PROMO_CODE_PATTERN = re.compile(r"^[A-Z0-9_]+$")


def validate_required_text(value, label):
    if value is None or not str(value).strip():
        raise ValueError(f"{label} is required")
    return value


def validate_url(value):
    validate_required_text(value, "URL")
    parsed = urlparse(value.strip())
    if not parsed.scheme or not (parsed.netloc or parsed.path):
        raise ValueError("Please enter a valid URL")
    return value.strip()


def validate_time_format(value):
    if not value:
        raise ValueError("Time is required")
    if not TIME_PATTERN.match(value):
        raise ValueError("Invalid time format")
    return value


def validate_promo_code(value):
    validate_required_text(value, "Promo code")
    if not PROMO_CODE_PATTERN.match(value):
        raise ValueError(
            "Promo code should contain only uppercase letters, numbers, and underscores"
        )
    return value


def validate_expiry_date(value, today):
    if value and date.fromisoformat(str(value)[:10]) <= today:
        raise ValueError("Expiry date must be after today")
    return value
