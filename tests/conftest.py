"""Pytest fixtures for reading plan tests."""

from datetime import date

import pytest

from readbible.annotator import ChapterAnnotator
from readbible.catalog import BookCatalog
from readbible.generator import PlanGenerator, _memory_cache
from readbible.models import BibleBook, Category, Testament, YearlyPlan


@pytest.fixture(autouse=True)
def clear_plan_cache():
    """Clear the module-level plan cache before each test."""
    _memory_cache.clear()
    yield
    _memory_cache.clear()


@pytest.fixture
def small_catalog() -> BookCatalog:
    """A tiny catalog that forces both pools to wrap many times."""
    return BookCatalog(
        [
            BibleBook("ปฐมกาล", "Genesis", 3, Testament.OLD, Category.LAW),
            BibleBook("รูธ", "Ruth", 2, Testament.OLD, Category.HISTORY),
            BibleBook("สดุดี", "Psalms", 150, Testament.OLD, Category.WISDOM),
            BibleBook("สุภาษิต", "Proverbs", 31, Testament.OLD, Category.WISDOM),
            BibleBook("มาระโก", "Mark", 4, Testament.NEW, Category.GOSPELS),
            BibleBook("ยูดา", "Jude", 1, Testament.NEW, Category.EPISTLES),
        ]
    )


@pytest.fixture
def annotator() -> ChapterAnnotator:
    return ChapterAnnotator(
        descriptions={"ปฐมกาล": {1: "การสร้างโลกและมนุษย์"}},
        taglines={"สุภาษิต": "ปัญญาสำหรับชีวิตประจำวัน"},
    )


@pytest.fixture
def small_plan(small_catalog: BookCatalog, annotator: ChapterAnnotator) -> YearlyPlan:
    return PlanGenerator(small_catalog, annotator).generate(date(2024, 1, 1))


@pytest.fixture
def plan_2024() -> YearlyPlan:
    """Plan from the bundled catalog starting 2024-01-01."""
    return PlanGenerator().generate(date(2024, 1, 1))


@pytest.fixture
def all_daily_ids(plan_2024: YearlyPlan) -> set[str]:
    return {f"{r.iso_date}-daily" for r in plan_2024.readings}
