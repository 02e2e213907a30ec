"""Plain-text rendering of readings and progress."""

from collections.abc import Callable
from datetime import date

from .models import BooksReadSummary, DailyReading, ProgressSnapshot

THAI_MONTHS = (
    "มกราคม",
    "กุมภาพันธ์",
    "มีนาคม",
    "เมษายน",
    "พฤษภาคม",
    "มิถุนายน",
    "กรกฎาคม",
    "สิงหาคม",
    "กันยายน",
    "ตุลาคม",
    "พฤศจิกายน",
    "ธันวาคม",
)

_STATIC_MESSAGES: dict[str, str] = {}


def _get_static_message(key: str, generator: Callable[[], str]) -> str:
    """Get a static message from cache or generate it."""
    if key not in _STATIC_MESSAGES:
        _STATIC_MESSAGES[key] = generator()
    return _STATIC_MESSAGES[key]


def format_thai_date(for_date: date) -> str:
    """Format a date as "1 มกราคม 2567" (Buddhist era year)."""
    return f"{for_date.day} {THAI_MONTHS[for_date.month - 1]} {for_date.year + 543}"


def format_daily_reading(reading: DailyReading, completed: bool = False) -> str:
    """Format one plan day as a message."""
    status = "✅ อ่านแล้ว" if completed else "⬜ ยังไม่ได้อ่าน"
    sections = [
        ("📜 พันธสัญญาเดิม", reading.old_testament),
        ("✝️ พันธสัญญาใหม่", reading.new_testament),
        ("🎵 สดุดี", reading.psalm),
        ("💡 สุภาษิต", reading.proverbs),
    ]

    lines = [
        f"📖 แผนการอ่านพระคัมภีร์ประจำปี | วันที่ {reading.day}/365",
        format_thai_date(reading.date),
        "",
    ]
    for title, section in sections:
        lines.append(f"{title}: {section.reference}")
        if section.description != section.reference:
            lines.append(f"   {section.description}")
    lines.append("")
    lines.append(status)
    return "\n".join(lines)


def format_progress(
    snapshot: ProgressSnapshot,
    books: BooksReadSummary | None = None,
    month_count: int | None = None,
) -> str:
    """Format a progress summary."""
    lines = [
        "📊 ความก้าวหน้า",
        f"อ่านแล้ว {snapshot.completed_count}/{snapshot.total_readings} วัน "
        f"({snapshot.progress_percentage}%)",
        f"🔥 ต่อเนื่อง {snapshot.current_streak} วัน",
        f"⏳ เหลืออีก {snapshot.days_remaining} วัน",
    ]
    if books is not None:
        lines.append(
            f"📚 อ่านไปแล้ว {books.total} เล่ม "
            f"(พันธสัญญาเดิม {len(books.old_testament_books)}, "
            f"พันธสัญญาใหม่ {len(books.new_testament_books)})"
        )
    if month_count is not None:
        lines.append(f"📅 เดือนนี้อ่านแล้ว {month_count} วัน")
    return "\n".join(lines)


def format_missing_reading(for_date: date) -> str:
    """Message for a date outside the plan."""
    return f"ไม่มีการอ่านสำหรับวันที่ {format_thai_date(for_date)}"


def format_error_message() -> str:
    """Get error message."""

    def _generate() -> str:
        return "ไม่สามารถโหลดความก้าวหน้าการอ่านได้ กรุณาลองใหม่อีกครั้ง"

    return _get_static_message("error", _generate)
