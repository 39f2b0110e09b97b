from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from src.core.config import get_settings


def today_in_reporting_tz() -> date:
    """Calendar date in the reporting timezone; period boundaries are wall-clock days there."""
    settings = get_settings()
    return datetime.now(ZoneInfo(settings.reporting_timezone)).date()


def add_months(value: date, months: int) -> date:
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    return date(year, month, 1)


def month_end(value: date) -> date:
    last_day = calendar.monthrange(value.year, value.month)[1]
    return date(value.year, value.month, last_day)


def start_of_week(value: date, week_start_weekday: int) -> date:
    days_since_start = (value.weekday() - week_start_weekday) % 7
    return value - timedelta(days=days_since_start)
