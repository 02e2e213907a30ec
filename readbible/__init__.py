"""ReadBible yearly reading plan."""

from .generator import generate_yearly_plan, get_reading_for_date
from .progress import books_read, calculate_progress

__all__ = [
    "books_read",
    "calculate_progress",
    "generate_yearly_plan",
    "get_reading_for_date",
]
