"""Command logic shared by the CLI.

Resolves where completed readings come from (hosted store or local state
file) and turns plan lookups into formatted text.
"""

from __future__ import annotations

import logging
from datetime import date

from . import progress_store
from .config import Config
from .formatter import (
    format_daily_reading,
    format_error_message,
    format_missing_reading,
    format_progress,
)
from .models import CompletedReading, ReadingId, YearlyPlan
from .progress import books_read, calculate_progress
from .supabase_store import SupabaseClient

logger = logging.getLogger(__name__)


def build_remote_client(config: Config) -> SupabaseClient:
    """Create the hosted store client from config."""
    if not config.remote_enabled:
        raise ValueError("SUPABASE_URL and SUPABASE_KEY are required for --remote")
    return SupabaseClient(
        config.supabase_url or "",
        config.supabase_key or "",
        timeout=config.request_timeout,
    )


def load_records(
    user_id: str | None, client: SupabaseClient | None = None
) -> list[CompletedReading] | None:
    """Completion records for a user from the active store; None on failure."""
    if not user_id:
        return []
    if client is not None:
        return client.fetch_records(user_id)
    return progress_store.load_records(user_id)


def completed_ids_from(records: list[CompletedReading] | None) -> set[str] | None:
    if records is None:
        return None
    return {r.reading_id for r in records if r.is_completed}


def get_reading_message(
    plan: YearlyPlan, completed_ids: set[str], for_date: date
) -> str:
    """Text for the reading scheduled on for_date."""
    reading = plan.reading_for(for_date)
    if reading is None:
        logger.warning(f"No reading in plan {plan.start_date} for {for_date}")
        return format_missing_reading(for_date)
    return format_daily_reading(
        reading, completed=str(reading.reading_id) in completed_ids
    )


def get_progress_message(
    plan: YearlyPlan,
    completed_ids: set[str] | None,
    today: date | None = None,
    records: list[CompletedReading] | None = None,
) -> str:
    """Text summarizing progress through the plan.

    Only ids that belong to the plan are counted, so completions from an
    earlier plan year do not leak into this one. When records are given the
    number of readings completed this calendar month is shown as well.
    """
    if completed_ids is None:
        return format_error_message()
    plan_ids = {str(r.reading_id) for r in plan.readings}
    in_plan = completed_ids & plan_ids
    snapshot = calculate_progress(plan, in_plan, today)
    month_count = None
    if records is not None:
        month_count = progress_store.count_completed_in_month(records)
    return format_progress(snapshot, books_read(plan, in_plan), month_count)


def toggle_reading(
    user_id: str, for_date: date, client: SupabaseClient | None = None
) -> bool | None:
    """Flip completion of the day's reading. Returns the new state."""
    reading_id = str(ReadingId.daily(for_date))
    if client is not None:
        return client.toggle_reading(user_id, reading_id)
    try:
        return progress_store.toggle_reading(user_id, reading_id)
    except OSError as e:
        logger.exception(f"Could not update local progress: {e}")
        return None
