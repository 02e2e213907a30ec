"""Human-readable chapter descriptions."""

import json
import logging
from collections.abc import Mapping
from pathlib import Path

from .config import get_data_dir

logger = logging.getLogger(__name__)

_default_annotator: "ChapterAnnotator | None" = None


class ChapterAnnotator:
    """Looks up curated chapter descriptions, falling back to a plain label."""

    def __init__(
        self,
        descriptions: Mapping[str, Mapping[int, str]] | None = None,
        taglines: Mapping[str, str] | None = None,
    ):
        self._descriptions = {
            book: dict(chapters) for book, chapters in (descriptions or {}).items()
        }
        self._taglines = dict(taglines or {})

    @classmethod
    def from_file(cls, path: Path) -> "ChapterAnnotator":
        """Load descriptions from a JSON file."""
        if not path.exists():
            logger.warning(f"Chapter descriptions not found at {path}")
            return cls()

        with open(path, encoding="utf-8") as f:
            data = json.load(f)

        descriptions = {
            book: {int(chapter): text for chapter, text in chapters.items()}
            for book, chapters in data.get("descriptions", {}).items()
        }
        return cls(descriptions, data.get("taglines", {}))

    @classmethod
    def default(cls) -> "ChapterAnnotator":
        global _default_annotator
        if _default_annotator is None:
            path = get_data_dir() / "chapter_descriptions.json"
            _default_annotator = cls.from_file(path)
        return _default_annotator

    def describe(self, book: str, chapter: int) -> str:
        """Description for a chapter, e.g. "ปฐมกาล บทที่ 4"."""
        curated = self._descriptions.get(book, {}).get(chapter)
        if curated:
            return curated
        label = f"{book} บทที่ {chapter}"
        tagline = self._taglines.get(book)
        if tagline:
            return f"{label} - {tagline}"
        return label
