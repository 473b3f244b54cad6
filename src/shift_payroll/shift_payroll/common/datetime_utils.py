from __future__ import annotations

from datetime import date, datetime, time
from typing import Union

from ..core.constants import DATE_FORMAT, HOURS_DECIMALS, MONTH_FORMAT, TIME_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_date(value: Union[str, date], *, field: str = "date") -> date:
    """Parse YYYY-MM-DD string into date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    v = value.strip() if isinstance(value, str) else ""
    try:
        return datetime.strptime(v, DATE_FORMAT).date()
    except ValueError:
        raise ValidationError(f"{field} must be a valid date (YYYY-MM-DD)", field=field)


def parse_clock_time(value: Union[str, time], *, field: str = "time") -> time:
    """Parse HH:MM string into a time-of-day (seconds are dropped)."""
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    v = value.strip() if isinstance(value, str) else ""
    try:
        return datetime.strptime(v, TIME_FORMAT).time()
    except ValueError:
        raise ValidationError(f"{field} must be a valid time (HH:MM)", field=field)


def parse_month(value: str, *, field: str = "month") -> str:
    """Validate a YYYY-MM prefix and return it normalized."""
    v = value.strip() if isinstance(value, str) else ""
    try:
        return datetime.strptime(v, MONTH_FORMAT).strftime(MONTH_FORMAT)
    except ValueError:
        raise ValidationError(f"{field} must be a valid month (YYYY-MM)", field=field)


def in_month(work_date: date, month: str) -> bool:
    return work_date.strftime(MONTH_FORMAT) == month


def hours_between(start: time, end: time) -> float:
    """Elapsed hours from start to end on the same nominal day, rounded to 2 decimals."""
    anchor = date(2000, 1, 1)
    seconds = (datetime.combine(anchor, end) - datetime.combine(anchor, start)).total_seconds()
    return round(seconds / 3600, HOURS_DECIMALS)


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def format_time(value: time | None) -> str | None:
    return value.strftime(TIME_FORMAT) if value else None


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
