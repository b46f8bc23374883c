"""Async HTTP client for the pricing service with timeouts and fixed-delay retries.

Every failure inside an attempt (transport error, non-2xx status, deadline,
undecodable body) is reported as a :class:`~fx_series.errors.TransientFetchError`
subclass and retried identically. When the budget is spent the last attempt's
error is re-raised as-is.

Usage::

    policy = RetryPolicy(max_retries=3, timeout=2.0, backoff=3.0)
    async with RatesClient(policy) as client:
        snapshot = await client.fetch(url)
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

import httpx

from fx_series.errors import (
    FetchTimeoutError,
    FetchTransportError,
    HTTPStatusFetchError,
    ResponseFormatError,
    TransientFetchError,
)
from fx_series.ingestion.models import RateSnapshot
from fx_series.utils.logger import get_logger

LOGGER = get_logger(__name__)

USER_AGENT = "fx-series/1.0"


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """How many times to retry, the per-attempt deadline and the pause between attempts.

    ``timeout`` and ``backoff`` are in seconds.
    """

    max_retries: int = 0
    timeout: float = 10.0
    backoff: float = 3.0

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must not be negative")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.backoff < 0:
            raise ValueError("backoff must not be negative")

    @property
    def attempts(self) -> int:
        return self.max_retries + 1


class RatesClient:
    """Fetch JSON documents from the pricing service.

    Args:
        policy: Retry/timeout configuration. Defaults to ``RetryPolicy()``.
        transport: Optional ``httpx.AsyncBaseTransport``, e.g.
            ``httpx.MockTransport`` in tests.
        sleep: Coroutine used for the backoff pause.
    """

    def __init__(
        self,
        policy: RetryPolicy | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self.policy = policy or RetryPolicy()
        self._sleep = sleep
        client_kwargs: dict[str, Any] = {
            # The attempt deadline is enforced around the whole request below.
            "timeout": None,
            "headers": {"User-Agent": USER_AGENT, "Accept": "application/json"},
            "follow_redirects": True,
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        self._http = httpx.AsyncClient(**client_kwargs)

    async def get_json(
        self, url: str, parse: Callable[[str, Any], Any] | None = None
    ) -> Any:
        """GET ``url`` and return the decoded JSON body, retrying on failure.

        ``parse(url, payload)`` runs inside each attempt, so a
        :class:`~fx_series.errors.TransientFetchError` it raises is retried
        like a failed request.
        """

        async def attempt(target: str) -> Any:
            payload = await self._get_json_once(target)
            return payload if parse is None else parse(target, payload)

        return await self._with_retries(url, attempt)

    async def fetch(self, url: str) -> RateSnapshot:
        """GET ``url`` and return it as a :class:`RateSnapshot`.

        A body without a string ``date`` and an object ``rates`` counts as a
        failed attempt and is retried.
        """

        return await self.get_json(url, _to_snapshot)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "RatesClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def _with_retries(self, url: str, attempt_once):
        retries = self.policy.max_retries
        for index in range(self.policy.attempts):
            try:
                return await self._with_deadline(attempt_once(url))
            except TransientFetchError:
                if index >= retries:
                    raise
                LOGGER.warning(
                    'Attempt %s/%s failed for "%s", retrying...', index + 1, retries, url
                )
                await self._sleep(self.policy.backoff)
        raise RuntimeError("Unreachable: retry loop completed without result")

    async def _with_deadline(self, attempt):
        timeout = self.policy.timeout
        try:
            return await asyncio.wait_for(attempt, timeout=timeout)
        except asyncio.TimeoutError as exc:
            raise FetchTimeoutError(f"Request timed out after {timeout:g}s") from exc

    async def _get_json_once(self, url: str) -> Any:
        try:
            response = await self._http.get(url)
        except httpx.TimeoutException as exc:
            raise FetchTimeoutError(str(exc) or "Request timed out") from exc
        except httpx.HTTPError as exc:
            raise FetchTransportError(str(exc)) from exc
        except Exception as exc:
            # Anything else raised by the transport (OSError, InvalidURL, ...).
            raise FetchTransportError(str(exc) or type(exc).__name__) from exc

        if not response.is_success:
            raise HTTPStatusFetchError(response.status_code, response.reason_phrase, url)

        try:
            return response.json()
        except ValueError as exc:
            raise ResponseFormatError(f"Invalid JSON in response from {url}: {exc}") from exc


def _to_snapshot(url: str, payload: Any) -> RateSnapshot:
    if not isinstance(payload, dict):
        raise ResponseFormatError(f"Expected a JSON object from {url}")
    rate_date = payload.get("date")
    rates = payload.get("rates")
    if not isinstance(rate_date, str) or not isinstance(rates, dict):
        raise ResponseFormatError(f"Response from {url} lacks 'date' or 'rates'")
    LOGGER.info("Fetched %s rates for %s", len(rates), rate_date)
    return RateSnapshot(date=rate_date, rates=rates)


__all__ = ["RetryPolicy", "RatesClient", "USER_AGENT"]
