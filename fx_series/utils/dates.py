"""Date helpers used to build the historical endpoint URL."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone


def parse_date(value: str | date) -> date:
    """Return ``value`` as a calendar day; strings must be ``YYYY-MM-DD``."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError as exc:
        raise ValueError(f'Invalid date "{value}", expected YYYY-MM-DD') from exc


def yesterday(now: datetime | None = None) -> date:
    """Return the UTC calendar day before ``now`` (defaults to the current time).

    Naive datetimes are taken to be in UTC already.
    """

    current = now or datetime.now(timezone.utc)
    if current.tzinfo is not None:
        current = current.astimezone(timezone.utc)
    return (current - timedelta(days=1)).date()


__all__ = ["parse_date", "yesterday"]
