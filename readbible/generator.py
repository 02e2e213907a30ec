"""Yearly reading plan generation."""

import logging
from datetime import date, datetime, timedelta

from .annotator import ChapterAnnotator
from .catalog import PROVERBS, PSALMS, BookCatalog
from .models import PLAN_DAYS, BibleBook, ChapterReading, DailyReading, YearlyPlan

logger = logging.getLogger(__name__)

PSALM_CYCLE = 150
PROVERBS_CYCLE = 31

# In-memory cache of generated default plans (avoids regenerating per call)
_memory_cache: dict[str, YearlyPlan] = {}


def parse_start_date(value: date | datetime | str) -> date:
    """Normalize a plan start date, rejecting anything that is not a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.strptime(value.strip(), "%Y-%m-%d").date()
        except ValueError as e:
            raise ValueError(
                f"Invalid start date {value!r}: expected YYYY-MM-DD"
            ) from e
    raise ValueError(f"Invalid start date: {value!r}")


class _BookCursor:
    """Walks a book pool one chapter at a time, restarting at the first book."""

    def __init__(self, pool: tuple[BibleBook, ...]):
        self.pool = pool
        self.book_index = 0
        self.chapter = 1

    def take(self) -> tuple[BibleBook, int]:
        """Return the current (book, chapter) and advance."""
        book = self.pool[self.book_index]
        chapter = self.chapter

        self.chapter += 1
        if self.chapter > book.chapter_count:
            self.book_index += 1
            self.chapter = 1
            if self.book_index >= len(self.pool):
                self.book_index = 0
        return book, chapter


class PlanGenerator:
    """Builds deterministic one-year reading plans."""

    def __init__(
        self,
        catalog: BookCatalog | None = None,
        annotator: ChapterAnnotator | None = None,
    ):
        self.catalog = catalog or BookCatalog.default()
        self.annotator = annotator or ChapterAnnotator.default()

    def _reading(self, book: str, chapter: int) -> ChapterReading:
        return ChapterReading(
            book=book,
            chapter=chapter,
            description=self.annotator.describe(book, chapter),
        )

    def generate(self, start_date: date | datetime | str) -> YearlyPlan:
        """Generate the plan beginning on start_date.

        Every day gets one Old Testament chapter, one New Testament chapter,
        one Psalm and one chapter of Proverbs. The result depends only on
        start_date and the catalog, so the same date always yields the same
        plan.
        """
        start = parse_start_date(start_date)

        ot = _BookCursor(self.catalog.old_testament_pool())
        nt = _BookCursor(self.catalog.new_testament_pool())

        readings = []
        for day in range(1, PLAN_DAYS + 1):
            ot_book, ot_chapter = ot.take()
            nt_book, nt_chapter = nt.take()
            psalm_chapter = (day - 1) % PSALM_CYCLE + 1
            proverbs_chapter = (day - 1) % PROVERBS_CYCLE + 1

            readings.append(
                DailyReading(
                    day=day,
                    date=start + timedelta(days=day - 1),
                    old_testament=self._reading(ot_book.name, ot_chapter),
                    new_testament=self._reading(nt_book.name, nt_chapter),
                    psalm=self._reading(PSALMS, psalm_chapter),
                    proverbs=self._reading(PROVERBS, proverbs_chapter),
                )
            )

        plan = YearlyPlan(
            year=start.year,
            start_date=start,
            end_date=start + timedelta(days=PLAN_DAYS - 1),
            total_days=PLAN_DAYS,
            readings=tuple(readings),
        )
        logger.debug(f"Generated plan {plan.start_date} .. {plan.end_date}")
        return plan


def generate_yearly_plan(start_date: date | datetime | str) -> YearlyPlan:
    """Generate (or reuse) the plan for start_date with the bundled catalog."""
    start = parse_start_date(start_date)
    cache_key = start.isoformat()

    if cache_key in _memory_cache:
        logger.debug(f"Memory cache hit for plan starting {start}")
        return _memory_cache[cache_key]

    plan = PlanGenerator().generate(start)
    _memory_cache[cache_key] = plan
    logger.info(f"Generated reading plan starting {start}")
    return plan


def get_reading_for_date(
    plan: YearlyPlan, for_date: date | datetime
) -> DailyReading | None:
    """Get the reading for a calendar date, or None outside the plan."""
    return plan.reading_for(for_date)
