"""Calendar date helpers."""

import calendar
from datetime import date, datetime, timedelta
from enum import StrEnum
from zoneinfo import ZoneInfo

DATE_FORMAT = "%Y-%m-%d"


class TimeFrame(StrEnum):
    """Progress chart windows."""

    WEEK = "week"
    MONTH = "month"
    THREE_MONTHS = "three_months"


def format_day(value: date | datetime, tz: ZoneInfo) -> str:
    """Format a date (or an aware datetime in the local zone) as YYYY-MM-DD."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(tz)
        value = value.date()
    return value.strftime(DATE_FORMAT)


def local_today(tz: ZoneInfo) -> date:
    """Return today's date in the local time zone."""
    return datetime.now(tz=tz).date()


def timeframe_start(timeframe: TimeFrame, end: date) -> date:
    """Return the first day of a progress window ending on ``end``."""
    if timeframe is TimeFrame.WEEK:
        return end - timedelta(days=7)
    if timeframe is TimeFrame.MONTH:
        return _shift_months(end, -1)
    return _shift_months(end, -3)


def days_between(start: date, end: date) -> list[date]:
    """Return every day from start to end inclusive."""
    return [start + timedelta(days=offset) for offset in range((end - start).days + 1)]


def _shift_months(day: date, months: int) -> date:
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return day.replace(year=year, month=month, day=min(day.day, last_day))
