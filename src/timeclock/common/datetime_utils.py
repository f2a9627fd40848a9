from __future__ import annotations

from datetime import date, datetime, time, timedelta


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_hhmm(value: str) -> time:
    """Parse HH:MM string into time."""
    return datetime.strptime(value.strip(), "%H:%M").time()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now().replace(microsecond=0)


def week_start(day: date) -> date:
    """Monday of the week containing ``day``."""
    return day - timedelta(days=day.weekday())


def week_bounds(start: date, end: date) -> tuple[datetime, datetime]:
    """Widen ``[start, end]`` to whole weeks: [Monday 00:00, Monday after end 00:00)."""
    first = week_start(start)
    after_last = week_start(end) + timedelta(days=7)
    return datetime.combine(first, time.min), datetime.combine(after_last, time.min)


def day_bounds(start: date, end: date) -> tuple[datetime, datetime]:
    """[start 00:00, day after end 00:00)."""
    return datetime.combine(start, time.min), datetime.combine(end + timedelta(days=1), time.min)


def to_iso(value: datetime) -> str:
    return value.isoformat()
