from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from fx_series.storage import DEFAULT_DATA_DIR, currency_path
from fx_series.storage.line_sink import append_line, write_line


def test_write_line_adds_newline(tmp_path: Path) -> None:
    target = tmp_path / "USD.csv"

    asyncio.run(write_line(target, "test line"))

    assert target.read_text(encoding="utf-8") == "test line\n"


def test_write_line_overwrites_existing_file(tmp_path: Path) -> None:
    target = tmp_path / "USD.csv"

    asyncio.run(write_line(target, "first line"))
    asyncio.run(write_line(target, "second line"))

    assert target.read_text(encoding="utf-8") == "second line\n"


def test_append_line_appends(tmp_path: Path) -> None:
    target = tmp_path / "USD.csv"

    asyncio.run(write_line(target, "first line"))
    asyncio.run(append_line(target, "second line"))

    assert target.read_text(encoding="utf-8") == "first line\nsecond line\n"


def test_append_line_creates_missing_file_and_parents(tmp_path: Path) -> None:
    target = tmp_path / "nested" / "history" / "EUR.csv"

    asyncio.run(append_line(str(target), "test line"))

    assert target.read_text(encoding="utf-8") == "test line\n"


def test_currency_path_layout(tmp_path: Path) -> None:
    assert currency_path(tmp_path, "history", "eur") == tmp_path / "history" / "EUR.csv"
    assert DEFAULT_DATA_DIR == Path("data/v1")


def test_currency_path_rejects_empty_code(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        currency_path(tmp_path, "latest", "")
