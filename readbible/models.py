"""Data models for the yearly reading plan."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any

PLAN_DAYS = 365


class Testament(str, Enum):
    """Partition of the canon."""

    OLD = "old"
    NEW = "new"


class Category(str, Enum):
    """Literary category of a book."""

    LAW = "law"
    HISTORY = "history"
    WISDOM = "wisdom"
    PROPHETS = "prophets"
    GOSPELS = "gospels"
    EPISTLES = "epistles"
    APOCALYPTIC = "apocalyptic"


@dataclass(frozen=True)
class BibleBook:
    """A canonical book of the Bible."""

    name: str  # Thai name, used as the book's key everywhere
    name_en: str
    chapter_count: int
    testament: Testament
    category: Category

    def __post_init__(self) -> None:
        """Reject catalog entries without chapters."""
        if self.chapter_count < 1:
            raise ValueError(
                f"Book {self.name_en!r} must have at least one chapter, "
                f"got {self.chapter_count}"
            )


SECTIONS = ("daily", "ot", "nt", "psalm", "proverbs")


@dataclass(frozen=True)
class ReadingId:
    """Key of a completed-reading record.

    The daily section renders as ``"{date}-daily"``; the per-section ids
    render as ``"{section}-{date}"`` (``"ot-2024-01-01"``).
    """

    date: date
    section: str = "daily"

    def __post_init__(self) -> None:
        """Validate the section name."""
        if self.section not in SECTIONS:
            raise ValueError(f"Unknown reading section: {self.section!r}")

    def __str__(self) -> str:
        if self.section == "daily":
            return f"{self.date.isoformat()}-daily"
        return f"{self.section}-{self.date.isoformat()}"

    @classmethod
    def daily(cls, for_date: date) -> "ReadingId":
        """Id of the whole-day completion for a date."""
        return cls(date=for_date, section="daily")

    @classmethod
    def parse(cls, value: str) -> "ReadingId":
        """Parse either id shape back into a ReadingId."""
        value = value.strip()
        try:
            if value.endswith("-daily"):
                return cls(date=date.fromisoformat(value[: -len("-daily")]))
            section, _, iso = value.partition("-")
            if section in SECTIONS and section != "daily" and iso:
                return cls(date=date.fromisoformat(iso), section=section)
        except ValueError as e:
            raise ValueError(f"Invalid reading id {value!r}: {e}") from e
        raise ValueError(f"Invalid reading id {value!r}")


@dataclass(frozen=True)
class ChapterReading:
    """One chapter assigned to a plan day."""

    book: str
    chapter: int
    description: str

    @property
    def reference(self) -> str:
        """Thai reference for display."""
        return f"{self.book} บทที่ {self.chapter}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "book": self.book,
            "chapter": self.chapter,
            "description": self.description,
        }


@dataclass(frozen=True)
class DailyReading:
    """The four readings of one plan day."""

    day: int  # 1-based
    date: date
    old_testament: ChapterReading
    new_testament: ChapterReading
    psalm: ChapterReading
    proverbs: ChapterReading

    @property
    def iso_date(self) -> str:
        return self.date.isoformat()

    @property
    def reading_id(self) -> ReadingId:
        """Id under which the whole day is recorded as completed."""
        return ReadingId.daily(self.date)

    def to_dict(self) -> dict[str, Any]:
        return {
            "day": self.day,
            "date": self.iso_date,
            "oldTestament": self.old_testament.to_dict(),
            "newTestament": self.new_testament.to_dict(),
            "psalm": {
                "chapter": self.psalm.chapter,
                "description": self.psalm.description,
            },
            "proverbs": {
                "chapter": self.proverbs.chapter,
                "description": self.proverbs.description,
            },
        }


@dataclass(frozen=True)
class YearlyPlan:
    """A fixed-length plan of consecutive daily readings."""

    year: int
    start_date: date
    end_date: date
    total_days: int
    readings: tuple[DailyReading, ...]

    def __post_init__(self) -> None:
        """Validate that readings line up with the date range."""
        if len(self.readings) != self.total_days:
            raise ValueError(
                f"Plan must contain {self.total_days} readings, "
                f"got {len(self.readings)}"
            )
        if self.end_date != self.start_date + timedelta(days=self.total_days - 1):
            raise ValueError("Plan end date does not match its length")

    def reading_for(self, for_date: date) -> DailyReading | None:
        """Get the reading scheduled on a calendar date, if any."""
        if isinstance(for_date, datetime):
            for_date = for_date.date()
        offset = (for_date - self.start_date).days
        if 0 <= offset < len(self.readings):
            return self.readings[offset]
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "year": self.year,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "totalDays": self.total_days,
            "readings": [r.to_dict() for r in self.readings],
        }


@dataclass(frozen=True)
class ProgressSnapshot:
    """Derived progress through a plan."""

    total_readings: int
    completed_count: int
    progress_percentage: int
    current_streak: int
    days_remaining: int


@dataclass(frozen=True)
class BooksReadSummary:
    """Distinct books touched by completed days."""

    old_testament_books: frozenset[str]
    new_testament_books: frozenset[str]

    @property
    def total(self) -> int:
        return len(self.old_testament_books) + len(self.new_testament_books)


@dataclass(frozen=True)
class CompletedReading:
    """A stored completion record for one user and reading id."""

    user_id: str
    reading_id: str
    is_completed: bool
    completed_at: str | None  # ISO timestamp
    created_at: str | None = None
