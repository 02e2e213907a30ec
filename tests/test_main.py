"""Tests for the command line entry point."""

import json

import pytest

import main
from readbible import progress_store

ENV_VARS = [
    "READBIBLE_USER_ID",
    "READBIBLE_PLAN_START",
    "READBIBLE_STATE_DIR",
    "SUPABASE_URL",
    "SUPABASE_KEY",
]


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("READBIBLE_STATE_DIR", str(tmp_path / "state"))
    monkeypatch.setattr(main, "load_dotenv", lambda: None)
    monkeypatch.setattr(progress_store, "STATE_DIR", progress_store.STATE_DIR)
    monkeypatch.setattr(progress_store, "PROGRESS_FILE", progress_store.PROGRESS_FILE)


def test_preview_date(capsys):
    code = main.main(["--start", "2024-01-01", "--date", "2024-01-01"])
    out = capsys.readouterr().out
    assert code == 0
    assert "ปฐมกาล บทที่ 1" in out


def test_mark_and_progress(capsys):
    for day in ("2024-01-01", "2024-01-02", "2024-01-03"):
        assert main.main(["--start", "2024-01-01", "--date", day, "--user", "alice", "--mark"]) == 0
    capsys.readouterr()

    code = main.main(
        ["--start", "2024-01-01", "--date", "2024-01-03", "--user", "alice", "--progress"]
    )
    out = capsys.readouterr().out
    assert code == 0
    assert "✅" in out
    assert "3/365" in out
    assert "ต่อเนื่อง 3 วัน" in out


def test_progress_shows_month_count(capsys):
    assert main.main(["--start", "2024-01-01", "--date", "2024-01-01", "--user", "alice", "--mark"]) == 0
    capsys.readouterr()

    main.main(["--start", "2024-01-01", "--date", "2024-01-01", "--user", "alice", "--progress"])
    assert "เดือนนี้อ่านแล้ว 1 วัน" in capsys.readouterr().out


def test_default_plan_contains_leap_year_end(capsys):
    code = main.main(["--date", "2028-12-31"])
    out = capsys.readouterr().out
    assert code == 0
    assert "ไม่มีการอ่าน" not in out
    assert "วันที่ 365/365" in out


def test_progress_ignores_previous_year(capsys):
    for day in ("2025-12-29", "2025-12-30", "2025-12-31"):
        assert main.main(["--date", day, "--user", "alice", "--mark"]) == 0
    capsys.readouterr()

    code = main.main(["--date", "2026-01-01", "--user", "alice", "--progress"])
    out = capsys.readouterr().out
    assert code == 0
    assert "0/365" in out
    assert "ต่อเนื่อง 0 วัน" in out


def test_mark_outside_plan_is_rejected(capsys):
    code = main.main(
        ["--start", "2024-01-01", "--date", "2025-06-01", "--user", "alice", "--mark"]
    )
    assert code == 1
    assert progress_store.load_records("alice") == []


def test_mark_requires_user(capsys):
    assert main.main(["--mark"]) == 1
    assert "READBIBLE_USER_ID" in capsys.readouterr().err


def test_remote_requires_settings(capsys):
    assert main.main(["--remote"]) == 1
    assert "SUPABASE_URL" in capsys.readouterr().err


def test_invalid_start(capsys):
    assert main.main(["--start", "not-a-date"]) == 1
    assert "Invalid start date" in capsys.readouterr().err


def test_export(tmp_path):
    out_path = tmp_path / "plan.json"
    assert main.main(["--start", "2024-01-01", "--export", str(out_path)]) == 0
    data = json.loads(out_path.read_text(encoding="utf-8"))
    assert data["totalDays"] == 365
    assert data["readings"][0]["oldTestament"]["book"] == "ปฐมกาล"
