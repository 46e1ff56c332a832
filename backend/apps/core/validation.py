"""Small field validators returning user-facing error messages.

Each helper returns ``None`` when the value is acceptable, otherwise a
message. Callers collect messages into a list; an empty list means valid.
"""
from datetime import date
from decimal import Decimal, InvalidOperation

from django.core.exceptions import ValidationError
from django.core.validators import validate_email


def clean_text(value) -> str:
    if value is None:
        return ""
    return str(value).strip()


def required(value, message: str) -> str | None:
    if not clean_text(value):
        return message
    return None


def max_length(value, limit: int, label: str) -> str | None:
    if len(clean_text(value)) > limit:
        return f"{label} must be at most {limit} characters"
    return None


def email(value, label: str = "Email") -> str | None:
    text = clean_text(value)
    if not text:
        return None
    try:
        validate_email(text)
    except ValidationError:
        return f"{label} must be a valid email address"
    return None


def parse_decimal(value) -> Decimal | None:
    """Parse a strict decimal number; returns None for anything else."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not number.is_finite():
        return None
    return number


def decimal_range(value, label: str, minimum=None, maximum=None) -> str | None:
    number = parse_decimal(value)
    if number is None:
        return f"{label} must be a number"
    if minimum is not None and number < Decimal(str(minimum)):
        return f"{label} must be at least {minimum}"
    if maximum is not None and number > Decimal(str(maximum)):
        return f"{label} must be at most {maximum}"
    return None


def parse_iso_date(value) -> date | None:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(clean_text(value))
    except ValueError:
        return None


def parse_int(value, default=None):
    try:
        return int(value)
    except (TypeError, ValueError):
        return default
