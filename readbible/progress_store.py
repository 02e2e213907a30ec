"""Local completed-reading store backed by a JSON state file."""

import json
import logging
from collections.abc import Iterable
from datetime import date, datetime
from pathlib import Path
from typing import Any

from .config import get_state_dir
from .models import CompletedReading

logger = logging.getLogger(__name__)

STATE_DIR = get_state_dir()
PROGRESS_FILE = STATE_DIR / "reading_progress.json"


def use_state_dir(state_dir: Path) -> None:
    """Point the store at a different state directory."""
    global STATE_DIR, PROGRESS_FILE
    STATE_DIR = state_dir
    PROGRESS_FILE = state_dir / "reading_progress.json"
    logger.debug(f"Using progress state file {PROGRESS_FILE}")


def _load_state() -> dict[str, Any]:
    """Load the whole state file."""
    if PROGRESS_FILE.exists():
        try:
            data = json.loads(PROGRESS_FILE.read_text(encoding="utf-8"))
            if not isinstance(data.get("users"), dict):
                raise TypeError("'users' must be an object")
            return data
        except (json.JSONDecodeError, KeyError, TypeError, AttributeError):
            logger.warning("Failed to load reading progress, starting fresh")
            return {"users": {}}
    return {"users": {}}


def _save_state(state: dict[str, Any]) -> None:
    STATE_DIR.mkdir(parents=True, exist_ok=True)
    PROGRESS_FILE.write_text(
        json.dumps(state, ensure_ascii=False, indent=2, sort_keys=True),
        encoding="utf-8",
    )


def load_records(user_id: str) -> list[CompletedReading]:
    """Load all completion records for a user."""
    entries = _load_state()["users"].get(user_id, {})
    return [
        CompletedReading(
            user_id=user_id,
            reading_id=reading_id,
            is_completed=bool(entry.get("is_completed")),
            completed_at=entry.get("completed_at"),
        )
        for reading_id, entry in sorted(entries.items())
    ]


def load_completed(user_id: str) -> set[str]:
    """Load the reading ids a user has completed."""
    return {r.reading_id for r in load_records(user_id) if r.is_completed}


def mark_complete(user_id: str, reading_id: str, now: datetime | None = None) -> bool:
    """Mark a reading complete. Returns True if it was not complete before."""
    state = _load_state()
    entries = state["users"].setdefault(user_id, {})
    existing = entries.get(reading_id)
    if existing and existing.get("is_completed"):
        return False
    if now is None:
        now = datetime.now()
    entries[reading_id] = {
        "is_completed": True,
        "completed_at": now.isoformat(timespec="seconds"),
    }
    _save_state(state)
    logger.info(f"Marked {reading_id} complete for {user_id}")
    return True


def mark_incomplete(user_id: str, reading_id: str) -> bool:
    """Remove a completion. Returns True if a record was removed."""
    state = _load_state()
    entries = state["users"].get(user_id, {})
    if reading_id not in entries:
        return False
    del entries[reading_id]
    _save_state(state)
    logger.info(f"Removed {reading_id} for {user_id}")
    return True


def toggle_reading(user_id: str, reading_id: str, now: datetime | None = None) -> bool:
    """Flip a reading's completion. Returns the new state."""
    if is_completed(user_id, reading_id):
        mark_incomplete(user_id, reading_id)
        return False
    mark_complete(user_id, reading_id, now)
    return True


def is_completed(user_id: str, reading_id: str) -> bool:
    return reading_id in load_completed(user_id)


def count_completed_in_month(
    records: Iterable[CompletedReading], today: date | None = None
) -> int:
    """Count completions recorded in the same calendar month as today.

    Records without completed_at fall back to created_at. Timestamps with an
    offset are converted to local time before the month is compared.
    """
    if today is None:
        today = date.today()
    count = 0
    for record in records:
        stamp = record.completed_at or record.created_at
        if not record.is_completed or not stamp:
            continue
        try:
            completed = datetime.fromisoformat(stamp)
        except ValueError:
            logger.warning(f"Ignoring bad timestamp on {record.reading_id}")
            continue
        if completed.tzinfo is not None:
            completed = completed.astimezone()
        if completed.year == today.year and completed.month == today.month:
            count += 1
    return count
