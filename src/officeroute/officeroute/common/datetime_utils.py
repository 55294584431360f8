from __future__ import annotations

from datetime import date, datetime
from typing import Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_datetime(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    # JavaScript clients write a trailing "Z".
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def format_iso_datetime(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def whole_minutes_between(start: datetime, end: datetime) -> int:
    """Floor of (end - start) in minutes; negative when end precedes start.

    Naive values are read as local time when the other side is tz-aware.
    """
    if (start.tzinfo is None) != (end.tzinfo is None):
        start, end = start.astimezone(), end.astimezone()
    return int((end - start).total_seconds() // 60)
