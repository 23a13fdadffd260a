"""Tests for formatting and async helpers."""

import asyncio
from datetime import datetime, timezone

import pytest

from pages_deploy.utils import run_async
from pages_deploy.utils.formatting import (
    format_duration,
    format_timestamp,
    parse_timestamp,
    short_revision,
    truncate,
)


def test_parse_timestamp():
    assert parse_timestamp("2024-05-01T10:00:00Z") == datetime(2024, 5, 1, 10, tzinfo=timezone.utc)
    assert parse_timestamp(None) is None
    assert parse_timestamp("") is None


def test_truncate_commit_message():
    assert truncate("Update buykit-fixed via SiteHub Editor - 2024-05-01", 30) == \
        "Update buykit-fixed via SiteHu..."
    assert truncate("short", 30) == "short"


def test_short_revision():
    assert short_revision("0123456789abcdef") == "0123456"


def test_format_helpers():
    assert format_duration(65) == "1m 5s"
    assert format_timestamp(None) == "N/A"
    assert format_timestamp(datetime(2024, 5, 1, 10, 30, tzinfo=timezone.utc)) == "2024-05-01 10:30"


def test_run_async_without_loop():
    async def answer():
        return 42

    assert run_async(answer()) == 42


@pytest.mark.asyncio
async def test_run_async_inside_running_loop():
    async def answer():
        await asyncio.sleep(0)
        return 42

    assert run_async(answer()) == 42


def test_run_async_propagates_errors():
    async def fail():
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        run_async(fail())
