"""Helpers for locating the per-currency rate files."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Final

__all__ = ["DEFAULT_DATA_DIR", "HISTORY_DIRNAME", "LATEST_DIRNAME", "PathBuilder", "currency_path"]

# Relative to the working directory the job is started from.
DEFAULT_DATA_DIR: Final[Path] = Path("data") / "v1"
HISTORY_DIRNAME: Final[str] = "history"
LATEST_DIRNAME: Final[str] = "latest"

PathBuilder = Callable[[str], Path]


def currency_path(data_dir: str | Path, kind: str, currency: str) -> Path:
    """Return ``<data_dir>/<kind>/<CURRENCY>.csv``."""

    if not currency:
        raise ValueError("currency code must not be empty")
    return Path(data_dir) / kind / f"{currency.upper()}.csv"
