# app/core/presets.py

from datetime import date, timedelta
from calendar import monthrange

from app.core.errors import ValidationError

PRESETS = (
    "today",
    "yesterday",
    "this_week",
    "last_week",
    "this_month",
    "last_month",
)


def _week_start(day: date) -> date:
    # Weeks run Sunday to Saturday
    return day - timedelta(days=(day.weekday() + 1) % 7)


def _month_bounds(year: int, month: int):
    last_day = monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def resolve_preset(preset: str, today: date):
    """Return the inclusive ``(start, end)`` dates a preset covers."""
    if preset == "today":
        return today, today

    if preset == "yesterday":
        yesterday = today - timedelta(days=1)
        return yesterday, yesterday

    if preset == "this_week":
        start = _week_start(today)
        return start, start + timedelta(days=6)

    if preset == "last_week":
        start = _week_start(today) - timedelta(days=7)
        return start, start + timedelta(days=6)

    if preset == "this_month":
        return _month_bounds(today.year, today.month)

    if preset == "last_month":
        first_of_month = today.replace(day=1)
        previous = first_of_month - timedelta(days=1)
        return _month_bounds(previous.year, previous.month)

    raise ValidationError(f"Unknown preset {preset!r}")
