"""Rate sync jobs for :mod:`fx_series`."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

__all__ = ["sync_rates", "sync_historical", "sync_latest"]

if TYPE_CHECKING:  # pragma: no cover - import only for static analyzers
    from fx_series.sync.populate_rates import sync_historical as sync_historical
    from fx_series.sync.populate_rates import sync_latest as sync_latest
    from fx_series.sync.populate_rates import sync_rates as sync_rates


def __getattr__(name: str) -> Any:
    """Lazily expose the job helpers so importing the package stays cheap."""

    if name in {"sync_rates", "sync_historical", "sync_latest"}:
        from fx_series.sync.populate_rates import sync_historical as _sync_historical
        from fx_series.sync.populate_rates import sync_latest as _sync_latest
        from fx_series.sync.populate_rates import sync_rates as _sync_rates

        return {
            "sync_rates": _sync_rates,
            "sync_historical": _sync_historical,
            "sync_latest": _sync_latest,
        }[name]
    raise AttributeError(f"module 'fx_series.sync' has no attribute {name}")
