from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from fx_series.utils.currencies import QUOTES
from fx_series.utils.dates import parse_date, yesterday


def test_parse_date_accepts_date_instance() -> None:
    today = date(2024, 1, 1)
    assert parse_date(today) == today


def test_parse_date_truncates_datetime() -> None:
    assert parse_date(datetime(2024, 1, 1, 23, 59)) == date(2024, 1, 1)


def test_parse_date_parses_iso_string() -> None:
    assert parse_date(" 2024-02-29 ") == date(2024, 2, 29)


def test_parse_date_rejects_other_formats() -> None:
    with pytest.raises(ValueError, match="expected YYYY-MM-DD"):
        parse_date("29/02/2024")


def test_yesterday_uses_utc_calendar_day() -> None:
    # 01:00 at UTC+05:00 is still the previous day in UTC.
    now = datetime(2024, 3, 1, 1, 0, tzinfo=timezone(timedelta(hours=5)))

    assert yesterday(now) == date(2024, 2, 28)


def test_yesterday_treats_naive_datetimes_as_utc() -> None:
    assert yesterday(datetime(2024, 1, 1, 0, 30)) == date(2023, 12, 31)


def test_yesterday_defaults_to_now() -> None:
    expected = (datetime.now(timezone.utc) - timedelta(days=1)).date()

    assert yesterday() in {expected, expected + timedelta(days=1)}


def test_quotes_are_three_letter_codes() -> None:
    assert {"EUR", "GBP", "JPY", "USD"} <= QUOTES
    assert all(len(code) == 3 and code.isupper() for code in QUOTES)
    assert "XXX" not in QUOTES
