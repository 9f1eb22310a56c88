"""Utility functions."""
import math
import uuid
from datetime import date, datetime, time, timedelta

END_OF_DAY = time(23, 59, 59, 999000)


def week_start_for(day: date) -> date:
    """Return the Sunday on or before ``day``."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def end_of_day(day: date) -> datetime:
    """Last millisecond of ``day`` in local time."""
    return datetime.combine(day, END_OF_DAY)


def hours_to_minutes(hours: float) -> int:
    """Convert hours to whole minutes, rounding halves up and never below 1."""
    return max(1, math.floor(hours * 60 + 0.5))


def new_exercise_id(prefix: str = "ex") -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"
