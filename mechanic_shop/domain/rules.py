from __future__ import annotations

import datetime as dt

from ..errors import ValidationError

MAX_VIN_LEN = 17
MIN_CAR_YEAR = 1970
MAX_EXPERIENCE = 100
SQLITE_INT_MIN = -(2 ** 63)
SQLITE_INT_MAX = 2 ** 63 - 1

# Accepted input formats; storage is always ISO.
DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y", "%Y%m%d")


def require_text(name: str, value) -> str:
    s = "" if value is None else str(value).strip()
    if not s:
        raise ValidationError(f"{name} must not be empty")
    return s


def normalize_vin(vin) -> str:
    """Strip whitespace; VINs are non-empty and at most 17 characters."""
    v = require_text("vin", vin)
    if len(v) > MAX_VIN_LEN:
        raise ValidationError(f"vin '{v}' is longer than {MAX_VIN_LEN} characters")
    return v


def require_int(name: str, value) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be an integer")
    if isinstance(value, int):
        n = value
    else:
        try:
            n = int(str(value).strip())
        except (TypeError, ValueError):
            raise ValidationError(f"{name} must be an integer, got {value!r}") from None
    # SQLite INTEGER is a signed 64-bit value
    if not SQLITE_INT_MIN <= n <= SQLITE_INT_MAX:
        raise ValidationError(f"{name} is out of range, got {n}")
    return n


def require_id(name: str, value) -> int:
    """Row keys are non-negative integers."""
    n = require_int(name, value)
    if n < 0:
        raise ValidationError(f"{name} must not be negative, got {n}")
    return n


def require_positive(name: str, value) -> int:
    n = require_int(name, value)
    if n <= 0:
        raise ValidationError(f"{name} must be a positive integer, got {n}")
    return n


def validate_experience(years) -> int:
    n = require_int("experience", years)
    if n < 0 or n >= MAX_EXPERIENCE:
        raise ValidationError(f"experience must be between 0 and {MAX_EXPERIENCE - 1} years, got {n}")
    return n


def validate_year(year) -> int:
    n = require_int("year", year)
    if n < MIN_CAR_YEAR:
        raise ValidationError(f"year must be {MIN_CAR_YEAR} or later, got {n}")
    return n


def parse_date(text) -> dt.date:
    """Parse YYYY-MM-DD, MM/DD/YYYY or YYYYMMDD."""
    if isinstance(text, dt.datetime):
        return text.date()
    if isinstance(text, dt.date):
        return text
    s = require_text("date", text)
    for fmt in DATE_FORMATS:
        try:
            return dt.datetime.strptime(s, fmt).date()
        except ValueError:
            continue
    raise ValidationError(f"invalid date '{s}', expected YYYY-MM-DD, MM/DD/YYYY or YYYYMMDD")


def ensure_closing_after_opening(opened, closed) -> dt.date:
    """A request can only be closed on a day strictly after it was opened."""
    o = parse_date(opened)
    c = parse_date(closed)
    if c <= o:
        raise ValidationError(f"closing date {c.isoformat()} must be after the request date {o.isoformat()}")
    return c
