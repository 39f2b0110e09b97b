from __future__ import annotations

from datetime import date, timedelta

import pytest

from src.analytics.periods import resolve_month, resolve_period, resolve_timeframe
from src.core.errors import BadRequestError
from src.models.earnings import PeriodKind


def test_week_period_starts_on_saturday_before_reference():
    period = resolve_period(PeriodKind.WEEK, 0, date(2024, 1, 10))
    assert period.start == date(2024, 1, 6)
    assert period.end == date(2024, 1, 12)
    assert period.label == "Jan 6"


def test_week_period_always_spans_seven_days_around_reference():
    reference = date(2024, 2, 20)
    for day in range(21):
        current = reference + timedelta(days=day)
        period = resolve_period(PeriodKind.WEEK, 0, current)
        assert period.start.weekday() == 5
        assert (period.end - period.start).days == 6
        assert period.start <= current <= period.end


def test_week_offset_steps_back_whole_weeks():
    period = resolve_period(PeriodKind.WEEK, 1, date(2024, 1, 6))
    assert period.start == date(2023, 12, 30)
    assert period.end == date(2024, 1, 5)
    assert period.label == "Dec 30"


def test_week_start_weekday_is_configurable():
    period = resolve_period(PeriodKind.WEEK, 0, date(2024, 1, 3), week_start_weekday=0)
    assert period.start == date(2024, 1, 1)
    assert period.end == date(2024, 1, 7)


@pytest.mark.parametrize("reference", [date(2024, 3, 1), date(2024, 3, 15), date(2024, 3, 31)])
def test_previous_month_ignores_day_of_month(reference):
    period = resolve_period(PeriodKind.MONTH, 1, reference)
    assert period.start == date(2024, 2, 1)
    assert period.end == date(2024, 2, 29)
    assert period.label == "Feb 2024"


def test_month_offset_crosses_year_boundary():
    period = resolve_period(PeriodKind.MONTH, 1, date(2024, 1, 15))
    assert period.start == date(2023, 12, 1)
    assert period.end == date(2023, 12, 31)
    assert period.label == "Dec 2023"


def test_quarter_uses_calendar_quarters():
    current = resolve_period(PeriodKind.QUARTER, 0, date(2024, 5, 20))
    assert (current.start, current.end, current.label) == (date(2024, 4, 1), date(2024, 6, 30), "Q2 2024")

    earlier = resolve_period(PeriodKind.QUARTER, 2, date(2024, 5, 20))
    assert (earlier.start, earlier.end, earlier.label) == (date(2023, 10, 1), date(2023, 12, 31), "Q4 2023")


def test_negative_offset_is_rejected():
    with pytest.raises(BadRequestError):
        resolve_period(PeriodKind.MONTH, -1, date(2024, 1, 1))


def test_resolve_month_returns_full_calendar_month():
    period = resolve_month(2, 2023)
    assert period.kind == PeriodKind.MONTH
    assert period.start == date(2023, 2, 1)
    assert period.end == date(2023, 2, 28)


@pytest.mark.parametrize("month,year", [(0, 2024), (13, 2024), (6, 2019), (6, 2101)])
def test_resolve_month_rejects_out_of_range_values(month, year):
    with pytest.raises(BadRequestError):
        resolve_month(month, year)


def test_specific_month_takes_precedence_over_timeframe():
    period = resolve_timeframe(PeriodKind.WEEK, date(2024, 5, 20), specific_month=(1, 2024))
    assert period.kind == PeriodKind.MONTH
    assert period.start == date(2024, 1, 1)
    assert period.end == date(2024, 1, 31)


def test_timeframe_without_specific_month_uses_current_period():
    period = resolve_timeframe(PeriodKind.QUARTER, date(2024, 11, 2))
    assert period.start == date(2024, 10, 1)
    assert period.end == date(2024, 12, 31)
