from __future__ import annotations

from datetime import date, timedelta
from typing import Optional, Tuple

from src.core.errors import BadRequestError
from src.models.earnings import Period, PeriodKind
from src.shared.time import add_months, month_end, start_of_week

MONTH_LABELS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
SATURDAY = 5
MIN_YEAR = 2020
MAX_YEAR = 2100


def resolve_period(
    kind: PeriodKind,
    offset: int,
    reference: date,
    week_start_weekday: int = SATURDAY,
) -> Period:
    """Return the period ``offset`` steps before the one containing ``reference``."""
    if offset < 0:
        raise BadRequestError("Period offset must be zero or positive")
    if kind == PeriodKind.WEEK:
        start = start_of_week(reference - timedelta(days=7 * offset), week_start_weekday)
        return Period(kind=kind, start=start, end=start + timedelta(days=6), label=week_label(start))
    if kind == PeriodKind.MONTH:
        start = add_months(reference.replace(day=1), -offset)
        return Period(kind=kind, start=start, end=month_end(start), label=month_label(start))
    if kind == PeriodKind.QUARTER:
        quarter_start = date(reference.year, _quarter_first_month(reference.month), 1)
        start = add_months(quarter_start, -3 * offset)
        end = month_end(add_months(start, 2))
        return Period(kind=kind, start=start, end=end, label=quarter_label(start))
    raise BadRequestError(f"Unsupported period kind: {kind}")


def resolve_month(month: int, year: int) -> Period:
    if month < 1 or month > 12 or year < MIN_YEAR or year > MAX_YEAR:
        raise BadRequestError("Invalid month or year")
    start = date(year, month, 1)
    return Period(kind=PeriodKind.MONTH, start=start, end=month_end(start), label=month_label(start))


def resolve_timeframe(
    kind: PeriodKind,
    reference: date,
    specific_month: Optional[Tuple[int, int]] = None,
    week_start_weekday: int = SATURDAY,
) -> Period:
    # An explicit (month, year) always wins over the timeframe selector.
    if specific_month is not None:
        month, year = specific_month
        return resolve_month(month, year)
    return resolve_period(kind, 0, reference, week_start_weekday)


def week_label(start: date) -> str:
    return f"{MONTH_LABELS[start.month - 1]} {start.day}"


def month_label(start: date) -> str:
    return f"{MONTH_LABELS[start.month - 1]} {start.year}"


def quarter_label(start: date) -> str:
    return f"Q{(start.month - 1) // 3 + 1} {start.year}"


def _quarter_first_month(month: int) -> int:
    return ((month - 1) // 3) * 3 + 1
