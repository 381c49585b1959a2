"""Calendar-date helpers shared by validation and both record stores."""

from datetime import date, datetime, timezone
from typing import Any


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def parse_calendar_date(value: Any) -> date:
    """Parse a date, datetime, YYYY-MM-DD or ISO-8601 datetime string. Raises ValueError."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"not a date: {value!r}")

    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date()


def to_calendar_date(value: Any) -> date:
    """Like parse_calendar_date, but missing or unparseable input becomes today (UTC)."""
    if value is None or value == "":
        return utc_today()
    try:
        return parse_calendar_date(value)
    except ValueError:
        return utc_today()
