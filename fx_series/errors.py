"""Exception hierarchy for the fx_series package."""

from __future__ import annotations


class FxSeriesError(Exception):
    """Base class for every error raised by fx_series."""


class ConfigurationError(FxSeriesError):
    """A required environment value is missing or empty."""


class TransientFetchError(FxSeriesError):
    """A single fetch attempt failed; the client may retry it."""


class FetchTimeoutError(TransientFetchError):
    """The attempt did not complete within the per-attempt deadline."""


class FetchTransportError(TransientFetchError):
    """The request never produced a response (connection, DNS, protocol)."""


class ResponseFormatError(TransientFetchError):
    """The response body is not the JSON shape the client expects."""


class HTTPStatusFetchError(TransientFetchError):
    """The service answered with a non-success status code."""

    def __init__(self, status_code: int, reason: str, url: str) -> None:
        self.status_code = status_code
        self.reason = reason
        self.url = url
        super().__init__(f'HTTP {status_code}: "{reason}" on "{url}"')


__all__ = [
    "FxSeriesError",
    "ConfigurationError",
    "TransientFetchError",
    "FetchTimeoutError",
    "FetchTransportError",
    "ResponseFormatError",
    "HTTPStatusFetchError",
]
