import datetime as dt

import pytest

from mechanic_shop.domain.rules import (
    ensure_closing_after_opening,
    normalize_vin,
    parse_date,
    require_id,
    require_int,
    require_positive,
    require_text,
    validate_experience,
    validate_year,
)
from mechanic_shop.errors import ValidationError


@pytest.mark.parametrize("text", ["2024-03-15", "03/15/2024", "20240315"])
def test_parse_date_accepts_supported_formats(text):
    assert parse_date(text) == dt.date(2024, 3, 15)


@pytest.mark.parametrize("text", ["", "15.03.2024", "2024-02-30", "tomorrow"])
def test_parse_date_rejects_garbage(text):
    with pytest.raises(ValidationError):
        parse_date(text)


def test_parse_date_passes_dates_through():
    d = dt.date(2020, 1, 1)
    assert parse_date(d) is d
    assert parse_date(dt.datetime(2020, 1, 1, 12, 30)) == d


def test_normalize_vin_strips_and_limits_length():
    assert normalize_vin("  1HGCM82633A004352 ") == "1HGCM82633A004352"
    with pytest.raises(ValidationError):
        normalize_vin("   ")
    with pytest.raises(ValidationError):
        normalize_vin("X" * 18)


def test_require_positive():
    assert require_positive("bill", "150") == 150
    assert require_positive("bill", 1) == 1
    for bad in (0, -5, "abc", None, True):
        with pytest.raises(ValidationError):
            require_positive("bill", bad)


def test_experience_bounds():
    assert validate_experience("0") == 0
    assert validate_experience(99) == 99
    with pytest.raises(ValidationError):
        validate_experience(100)
    with pytest.raises(ValidationError):
        validate_experience(-1)


def test_year_lower_bound():
    assert validate_year("1970") == 1970
    with pytest.raises(ValidationError):
        validate_year(1969)


def test_require_text():
    assert require_text("name", "  Ann ") == "Ann"
    with pytest.raises(ValidationError):
        require_text("name", None)


def test_closing_must_be_strictly_after_opening():
    assert ensure_closing_after_opening("2024-01-01", "2024-01-02") == dt.date(2024, 1, 2)
    with pytest.raises(ValidationError):
        ensure_closing_after_opening("2024-01-01", "2024-01-01")
    with pytest.raises(ValidationError):
        ensure_closing_after_opening("2024-01-05", "01/04/2024")


def test_parse_date_error_names_every_format():
    with pytest.raises(ValidationError, match="YYYY-MM-DD, MM/DD/YYYY or YYYYMMDD"):
        parse_date("15.03.2024")


def test_integers_must_fit_sqlite():
    assert require_int("odometer", 2 ** 63 - 1) == 2 ** 63 - 1
    assert require_int("odometer", -(2 ** 63)) == -(2 ** 63)
    for bad in (2 ** 63, "99999999999999999999", -(2 ** 63) - 1):
        with pytest.raises(ValidationError, match="out of range"):
            require_int("odometer", bad)
    with pytest.raises(ValidationError, match="out of range"):
        require_positive("bill", 10 ** 20)


def test_require_id():
    assert require_id("rid", "0") == 0
    with pytest.raises(ValidationError, match="must not be negative"):
        require_id("rid", -1)
    with pytest.raises(ValidationError, match="out of range"):
        require_id("rid", 10 ** 20)
