"""Canonical book catalog."""

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from .config import get_data_dir
from .models import BibleBook, Category, Testament

logger = logging.getLogger(__name__)

PSALMS = "สดุดี"
PROVERBS = "สุภาษิต"

_default_catalog: "BookCatalog | None" = None


class BookCatalog:
    """An immutable, ordered collection of Bible books."""

    def __init__(self, books: Iterable[BibleBook]):
        self._books: tuple[BibleBook, ...] = tuple(books)
        self._by_name = {book.name: book for book in self._books}
        if len(self._by_name) != len(self._books):
            raise ValueError("Book catalog contains duplicate book names")

    @classmethod
    def from_file(cls, path: Path) -> "BookCatalog":
        """Load a catalog from a JSON array of book entries."""
        if not path.exists():
            raise FileNotFoundError(f"Book catalog not found at {path}")

        with open(path, encoding="utf-8") as f:
            data = json.load(f)

        books = [
            BibleBook(
                name=item["name"],
                name_en=item["name_en"],
                chapter_count=item["chapter_count"],
                testament=Testament(item["testament"]),
                category=Category(item["category"]),
            )
            for item in data
        ]
        logger.debug(f"Loaded {len(books)} books from {path}")
        return cls(books)

    @classmethod
    def default(cls) -> "BookCatalog":
        """The bundled 66-book catalog, loaded once."""
        global _default_catalog
        if _default_catalog is None:
            _default_catalog = cls.from_file(get_data_dir() / "books.json")
        return _default_catalog

    @property
    def books(self) -> tuple[BibleBook, ...]:
        return self._books

    def __len__(self) -> int:
        return len(self._books)

    def __iter__(self):
        return iter(self._books)

    def get_book(self, name: str) -> BibleBook | None:
        """Get a book by its Thai name."""
        return self._by_name.get(name)

    def chapter_count(self, name: str) -> int:
        """Number of chapters in a book; KeyError if unknown."""
        book = self._by_name.get(name)
        if book is None:
            raise KeyError(name)
        return book.chapter_count

    def testament_books(self, testament: Testament) -> tuple[BibleBook, ...]:
        return tuple(b for b in self._books if b.testament == testament)

    def old_testament_pool(self) -> tuple[BibleBook, ...]:
        """OT books read in sequence; Psalms and Proverbs run on their own cycles."""
        if PSALMS not in self._by_name or PROVERBS not in self._by_name:
            raise ValueError("Book catalog must include Psalms and Proverbs")
        pool = tuple(
            b
            for b in self.testament_books(Testament.OLD)
            if b.name not in (PSALMS, PROVERBS)
        )
        if not pool:
            raise ValueError("Book catalog has no Old Testament books to read")
        return pool

    def new_testament_pool(self) -> tuple[BibleBook, ...]:
        pool = self.testament_books(Testament.NEW)
        if not pool:
            raise ValueError("Book catalog has no New Testament books to read")
        return pool
