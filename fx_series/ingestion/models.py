"""Data models shared across ingestion modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, NamedTuple


@dataclass(frozen=True, slots=True)
class RateSnapshot:
    """One dated set of rates as returned by the pricing service."""

    date: str
    rates: Mapping[str, float | None] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Freeze the mapping so a snapshot cannot change after it is received.
        object.__setattr__(self, "rates", MappingProxyType(dict(self.rates)))


class WriteLine(NamedTuple):
    """A formatted output line destined for one currency's file."""

    currency: str
    line: str


__all__ = ["RateSnapshot", "WriteLine"]
