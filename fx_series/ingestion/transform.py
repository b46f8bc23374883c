"""Turn a rate snapshot into sorted per-currency output lines."""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Iterable

from fx_series.ingestion.models import RateSnapshot, WriteLine

# Decimal-point positions written without an exponent: 1e-6 <= |x| < 1e21.
_MIN_PLAIN_POINT = -5
_MAX_PLAIN_POINT = 21


def _number_text(value: float) -> str:
    """Shortest round-trip digits laid out the way the existing rate files are."""

    if value == 0:
        return "0"
    sign, digits, exponent = Decimal(repr(value)).normalize().as_tuple()
    text = "".join(map(str, digits))
    point = len(text) + exponent
    prefix = "-" if sign else ""
    if len(text) <= point <= _MAX_PLAIN_POINT:
        return prefix + text + "0" * (point - len(text))
    if 0 < point <= _MAX_PLAIN_POINT:
        return f"{prefix}{text[:point]}.{text[point:]}"
    if _MIN_PLAIN_POINT <= point <= 0:
        return f"{prefix}0.{'0' * -point}{text}"
    mantissa = text[0] if len(text) == 1 else f"{text[0]}.{text[1:]}"
    return f"{prefix}{mantissa}e{point - 1:+d}"


def format_rate(rate: object | None) -> str:
    """Render a rate for the CSV line; missing values become an empty field."""

    if rate is None or isinstance(rate, bool):
        return ""
    if isinstance(rate, int):
        return str(rate)
    if isinstance(rate, float):
        if math.isnan(rate) or math.isinf(rate):
            return ""
        return _number_text(rate)
    return str(rate)


def to_lines(snapshot: RateSnapshot, quotes: Iterable[str]) -> list[WriteLine]:
    """Return ``(currency, "date,rate")`` pairs for the allowed quotes.

    Entries are sorted by currency code (code-point order) regardless of the
    order of ``snapshot.rates``. Codes listed in ``quotes`` but absent from the
    snapshot produce no line.
    """

    allowed = frozenset(quotes)
    kept = sorted(
        (code, rate) for code, rate in snapshot.rates.items() if code in allowed
    )
    return [WriteLine(code, f"{snapshot.date},{format_rate(rate)}") for code, rate in kept]


__all__ = ["format_rate", "to_lines"]
