"""Tests for the local reading progress store."""

import os
import tempfile
import time
from datetime import date, datetime
from pathlib import Path
from unittest.mock import patch

import pytest

from readbible.models import CompletedReading
from readbible.progress_store import (
    count_completed_in_month,
    is_completed,
    load_completed,
    load_records,
    mark_complete,
    mark_incomplete,
    toggle_reading,
)


def _temp_state():
    """Create a temporary state directory."""
    tmpdir = Path(tempfile.mkdtemp())
    state_dir = tmpdir / "state"
    state_dir.mkdir()
    progress_file = state_dir / "reading_progress.json"
    return state_dir, progress_file


def test_load_empty():
    _, progress_file = _temp_state()
    with patch("readbible.progress_store.PROGRESS_FILE", progress_file):
        assert load_completed("alice") == set()


def test_load_corrupt_file():
    _, progress_file = _temp_state()
    progress_file.write_text("{not json")
    with patch("readbible.progress_store.PROGRESS_FILE", progress_file):
        assert load_completed("alice") == set()


def test_mark_and_load():
    state_dir, progress_file = _temp_state()
    with (
        patch("readbible.progress_store.PROGRESS_FILE", progress_file),
        patch("readbible.progress_store.STATE_DIR", state_dir),
    ):
        assert mark_complete("alice", "2024-01-01-daily") is True
        assert mark_complete("alice", "2024-01-01-daily") is False  # Already read
        assert mark_complete("alice", "2024-01-02-daily") is True
        assert load_completed("alice") == {"2024-01-01-daily", "2024-01-02-daily"}
        assert load_completed("bob") == set()


def test_record_fields():
    state_dir, progress_file = _temp_state()
    with (
        patch("readbible.progress_store.PROGRESS_FILE", progress_file),
        patch("readbible.progress_store.STATE_DIR", state_dir),
    ):
        mark_complete("alice", "2024-01-01-daily", now=datetime(2024, 1, 1, 7, 30))
        records = load_records("alice")
        assert records == [
            CompletedReading(
                user_id="alice",
                reading_id="2024-01-01-daily",
                is_completed=True,
                completed_at="2024-01-01T07:30:00",
            )
        ]


def test_mark_incomplete():
    state_dir, progress_file = _temp_state()
    with (
        patch("readbible.progress_store.PROGRESS_FILE", progress_file),
        patch("readbible.progress_store.STATE_DIR", state_dir),
    ):
        mark_complete("alice", "2024-01-01-daily")
        assert mark_incomplete("alice", "2024-01-01-daily") is True
        assert mark_incomplete("alice", "2024-01-01-daily") is False  # Already removed
        assert is_completed("alice", "2024-01-01-daily") is False


def test_toggle_twice_returns_to_unread():
    state_dir, progress_file = _temp_state()
    with (
        patch("readbible.progress_store.PROGRESS_FILE", progress_file),
        patch("readbible.progress_store.STATE_DIR", state_dir),
    ):
        assert toggle_reading("alice", "2024-01-03-daily") is True
        assert is_completed("alice", "2024-01-03-daily") is True
        assert toggle_reading("alice", "2024-01-03-daily") is False
        assert is_completed("alice", "2024-01-03-daily") is False


def test_count_completed_in_month():
    records = [
        CompletedReading("alice", "2024-03-01-daily", True, "2024-03-01T06:00:00"),
        CompletedReading("alice", "2024-03-02-daily", True, "2024-03-02T06:00:00+00:00"),
        CompletedReading("alice", "2024-02-28-daily", True, "2024-02-28T06:00:00"),
        CompletedReading("alice", "2023-03-05-daily", True, "2023-03-05T06:00:00"),
        CompletedReading("alice", "2024-03-03-daily", False, "2024-03-03T06:00:00"),
        CompletedReading("alice", "2024-03-04-daily", True, None),
        CompletedReading("alice", "2024-03-05-daily", True, "garbage"),
    ]
    assert count_completed_in_month(records, date(2024, 3, 15)) == 2


def test_count_completed_in_month_falls_back_to_created_at():
    records = [
        CompletedReading("alice", "2024-03-01-daily", True, None, "2024-03-01T06:00:00"),
        CompletedReading("alice", "2024-03-02-daily", True, None, None),
        CompletedReading("alice", "2024-03-03-daily", False, None, "2024-03-03T06:00:00"),
    ]
    assert count_completed_in_month(records, date(2024, 3, 15)) == 1


@pytest.fixture
def bangkok_time():
    """Run with local time in Asia/Bangkok (UTC+7)."""
    previous = os.environ.get("TZ")
    os.environ["TZ"] = "Asia/Bangkok"
    time.tzset()
    yield
    if previous is None:
        del os.environ["TZ"]
    else:
        os.environ["TZ"] = previous
    time.tzset()


@pytest.mark.skipif(not hasattr(time, "tzset"), reason="needs time.tzset")
def test_count_completed_in_month_uses_local_time(bangkok_time):
    # 20:00 UTC on March 31 is 03:00 on April 1 in Bangkok
    records = [
        CompletedReading("alice", "2024-03-31-daily", True, "2024-03-31T20:00:00+00:00"),
    ]
    assert count_completed_in_month(records, date(2024, 4, 1)) == 1
    assert count_completed_in_month(records, date(2024, 3, 31)) == 0
