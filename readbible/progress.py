"""Progress, streak and books-read calculations over a plan."""

import math
from collections.abc import Collection
from datetime import date, datetime

from .models import BooksReadSummary, ProgressSnapshot, YearlyPlan


def _as_date(value: date | datetime | None) -> date:
    if value is None:
        return date.today()
    if isinstance(value, datetime):
        return value.date()
    return value


def _percentage(completed: int, total: int) -> int:
    """Whole-number percentage, rounding halves up and clamped to 0..100."""
    if total <= 0:
        return 0
    pct = math.floor(100 * completed / total + 0.5)
    return max(0, min(100, pct))


def current_streak(
    plan: YearlyPlan,
    completed_ids: Collection[str],
    today: date | datetime | None = None,
) -> int:
    """Count consecutive completed days ending at the latest day on or before today.

    Days after today are skipped. The first missing day ends the streak.
    """
    today = _as_date(today)
    streak = 0
    for reading in reversed(plan.readings):
        if reading.date > today:
            continue
        if str(reading.reading_id) in completed_ids:
            streak += 1
        else:
            break
    return streak


def days_remaining(plan: YearlyPlan, today: date | datetime | None = None) -> int:
    today = _as_date(today)
    return max(0, (plan.end_date - today).days)


def calculate_progress(
    plan: YearlyPlan,
    completed_ids: Collection[str],
    today: date | datetime | None = None,
) -> ProgressSnapshot:
    """Summarize progress through a plan as of today.

    completed_count is the size of completed_ids as given; ids that do not
    belong to the plan still count toward it.
    """
    today = _as_date(today)
    total = len(plan.readings)
    completed = len(completed_ids)
    return ProgressSnapshot(
        total_readings=total,
        completed_count=completed,
        progress_percentage=_percentage(completed, total),
        current_streak=current_streak(plan, completed_ids, today),
        days_remaining=days_remaining(plan, today),
    )


def books_read(plan: YearlyPlan, completed_ids: Collection[str]) -> BooksReadSummary:
    """Distinct OT and NT books from the days marked complete."""
    old_books: set[str] = set()
    new_books: set[str] = set()
    for reading in plan.readings:
        if str(reading.reading_id) in completed_ids:
            old_books.add(reading.old_testament.book)
            new_books.add(reading.new_testament.book)
    return BooksReadSummary(
        old_testament_books=frozenset(old_books),
        new_testament_books=frozenset(new_books),
    )
