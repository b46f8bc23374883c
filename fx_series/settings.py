"""Environment-driven settings for the rate sync job."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Final, Mapping

from fx_series.errors import ConfigurationError
from fx_series.ingestion.client import RetryPolicy
from fx_series.storage import DEFAULT_DATA_DIR, HISTORY_DIRNAME, LATEST_DIRNAME, currency_path

BASE_URL_ENV: Final[str] = "FX_API_BASE_URL"
ACCESS_KEY_ENV: Final[str] = "FX_API_ACCESS_KEY"
DATA_DIR_ENV: Final[str] = "FX_DATA_DIR"

DEFAULT_RETRIES: Final[int] = 3
DEFAULT_TIMEOUT: Final[float] = 2.0
DEFAULT_BACKOFF: Final[float] = 3.0
DEFAULT_BATCH_SIZE: Final[int] = 4


def env(name: str, environ: Mapping[str, str] | None = None) -> str:
    """Return a required environment value; missing or empty values are an error."""

    source = os.environ if environ is None else environ
    value = source.get(name)
    if not value:
        raise ConfigurationError(f'"{name}" environment variable is not defined')
    return value


@dataclass(frozen=True, slots=True)
class Settings:
    """Everything the sync job needs besides the quote list."""

    base_url: str
    access_key: str
    data_dir: Path = DEFAULT_DATA_DIR
    retries: int = DEFAULT_RETRIES
    timeout: float = DEFAULT_TIMEOUT
    backoff: float = DEFAULT_BACKOFF
    batch_size: int = DEFAULT_BATCH_SIZE

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from ``environ`` (``os.environ`` by default)."""

        source = os.environ if environ is None else environ
        base_url = env(BASE_URL_ENV, source)
        access_key = env(ACCESS_KEY_ENV, source)
        data_dir = source.get(DATA_DIR_ENV) or DEFAULT_DATA_DIR
        return cls(
            base_url=base_url.rstrip("/"),
            access_key=access_key,
            data_dir=Path(data_dir),
        )

    def historical_url(self, day: date) -> str:
        return f"{self.base_url}/{day.isoformat()}?access_key={self.access_key}"

    def latest_url(self) -> str:
        return f"{self.base_url}/latest?access_key={self.access_key}"

    def retry_policy(self) -> RetryPolicy:
        return RetryPolicy(max_retries=self.retries, timeout=self.timeout, backoff=self.backoff)

    def history_path(self, currency: str) -> Path:
        return currency_path(self.data_dir, HISTORY_DIRNAME, currency)

    def latest_path(self, currency: str) -> Path:
        return currency_path(self.data_dir, LATEST_DIRNAME, currency)


__all__ = [
    "ACCESS_KEY_ENV",
    "BASE_URL_ENV",
    "DATA_DIR_ENV",
    "DEFAULT_BACKOFF",
    "DEFAULT_BATCH_SIZE",
    "DEFAULT_RETRIES",
    "DEFAULT_TIMEOUT",
    "Settings",
    "env",
]
