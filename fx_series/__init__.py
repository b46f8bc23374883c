"""Public interface for the fx_series package."""

from __future__ import annotations

from importlib import metadata as importlib_metadata

from fx_series.errors import (
    ConfigurationError,
    FetchTimeoutError,
    FetchTransportError,
    FxSeriesError,
    HTTPStatusFetchError,
    ResponseFormatError,
    TransientFetchError,
)
from fx_series.ingestion.client import RatesClient, RetryPolicy
from fx_series.ingestion.models import RateSnapshot, WriteLine
from fx_series.ingestion.transform import to_lines
from fx_series.settings import Settings
from fx_series.sync.fetcher import RatesFetcher, WriteTask
from fx_series.utils.concurrency import BoundedScheduler, run_bounded

__all__ = [
    "__version__",
    "BoundedScheduler",
    "ConfigurationError",
    "FetchTimeoutError",
    "FetchTransportError",
    "FxSeriesError",
    "HTTPStatusFetchError",
    "RateSnapshot",
    "RatesClient",
    "RatesFetcher",
    "ResponseFormatError",
    "RetryPolicy",
    "Settings",
    "TransientFetchError",
    "WriteLine",
    "WriteTask",
    "run_bounded",
    "sync_historical",
    "sync_latest",
    "sync_rates",
    "to_lines",
]

try:
    __version__ = importlib_metadata.version("fx-series")
except importlib_metadata.PackageNotFoundError:  # pragma: no cover - fallback for local runs
    __version__ = "0.1.0"


def sync_rates(*args, **kwargs):
    from fx_series.sync.populate_rates import sync_rates as _sync_rates

    return _sync_rates(*args, **kwargs)


def sync_historical(*args, **kwargs):
    from fx_series.sync.populate_rates import sync_historical as _sync_historical

    return _sync_historical(*args, **kwargs)


def sync_latest(*args, **kwargs):
    from fx_series.sync.populate_rates import sync_latest as _sync_latest

    return _sync_latest(*args, **kwargs)
