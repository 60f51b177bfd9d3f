from __future__ import annotations

from datetime import datetime


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def format_clock(value: datetime) -> str:
    """HH:MM:SS, the time format the attendance service expects."""
    return value.strftime("%H:%M:%S")


def format_banner(value: datetime) -> str:
    """Long form shown in the dashboard header, e.g. 'Monday, January 5, 2026 at 09:30 AM'."""
    return f"{value.strftime('%A, %B')} {value.day}, {value.year} at {value.strftime('%I:%M %p')}"
