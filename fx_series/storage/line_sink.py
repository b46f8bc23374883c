"""Line sinks that persist one formatted rate line per call."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Literal, Protocol

_Mode = Literal["a", "w"]


class LineSink(Protocol):
    """Contract for recording one line at one path.

    Implementations decide whether the line extends the file or replaces it.
    """

    async def __call__(self, path: Path, line: str) -> None:
        ...  # pragma: no cover - protocol definition


def _write(path: Path, line: str, mode: _Mode) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, mode, encoding="utf-8") as handle:
        handle.write(f"{line}\n")


async def write_line(path: str | Path, line: str) -> None:
    """Replace the contents of ``path`` with ``line`` and a trailing newline."""

    await asyncio.to_thread(_write, Path(path), line, "w")


async def append_line(path: str | Path, line: str) -> None:
    """Append ``line`` and a trailing newline to ``path``, creating it if needed."""

    await asyncio.to_thread(_write, Path(path), line, "a")


__all__ = ["LineSink", "append_line", "write_line"]
