"""CLI entry point for the daily rate sync."""

from __future__ import annotations

from fx_series.sync.populate_rates import main

if __name__ == "__main__":  # pragma: no cover - thin wrapper
    raise SystemExit(main())
