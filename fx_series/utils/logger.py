"""Logging utilities for the fx_series package."""

from __future__ import annotations

import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_LEVEL_ENV = "FX_SERIES_LOG_LEVEL"

_LOGGER: Optional[logging.Logger] = None


def get_logger(name: str = "fx_series") -> logging.Logger:
    """Return a logger, configuring the root handler on first use.

    The level is read from ``FX_SERIES_LOG_LEVEL`` (default ``INFO``).
    """
    global _LOGGER
    if _LOGGER is None:
        level_name = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
        logging.basicConfig(
            level=getattr(logging, level_name, logging.INFO),
            format=LOG_FORMAT,
        )
        _LOGGER = logging.getLogger("fx_series")
    return logging.getLogger(name)
