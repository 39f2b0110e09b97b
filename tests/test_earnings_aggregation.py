from __future__ import annotations

from datetime import date

import pytest

from src.analytics.earnings import WORKER_KEY_ID, aggregate
from src.models.earnings import BonusEvent, HoursEvent, Period, PeriodKind, SaleEvent

WEEK = Period(kind=PeriodKind.WEEK, start=date(2024, 1, 1), end=date(2024, 1, 7), label="Jan 1")


def test_sales_hours_and_bonus_are_summed_per_worker():
    result = aggregate(
        WEEK,
        sales=[SaleEvent(worker="A", sale_date=date(2024, 1, 2), gross_amount=1000, commission_rate=0.1)],
        hours=[HoursEvent(worker="A", work_date=date(2024, 1, 3), hours_worked=10, hourly_rate=15)],
        bonuses=[BonusEvent(worker="A", period_start=date(2024, 1, 1), bonus_amount=50)],
    )
    assert result.earnings == {"A": pytest.approx(300.0)}
    assert result.malformed_count == 0


def test_date_range_is_inclusive_on_both_ends():
    sales = [
        SaleEvent(worker="A", sale_date=date(2024, 1, 1), gross_amount=100, commission_rate=1),
        SaleEvent(worker="A", sale_date=date(2024, 1, 7), gross_amount=10, commission_rate=1),
        SaleEvent(worker="A", sale_date=date(2023, 12, 31), gross_amount=1000, commission_rate=1),
        SaleEvent(worker="A", sale_date=date(2024, 1, 8), gross_amount=1000, commission_rate=1),
    ]
    hours = [
        HoursEvent(worker="B", work_date=date(2024, 1, 7), hours_worked=2, hourly_rate=20),
        HoursEvent(worker="B", work_date=date(2024, 1, 8), hours_worked=2, hourly_rate=20),
    ]
    result = aggregate(WEEK, sales=sales, hours=hours)
    assert result.earnings == {"A": pytest.approx(110.0), "B": pytest.approx(40.0)}


def test_bonus_only_counts_for_exact_period_start():
    bonuses = [
        BonusEvent(worker="A", period_start=date(2024, 1, 1), bonus_amount=50),
        BonusEvent(worker="B", period_start=date(2024, 1, 3), bonus_amount=75),
    ]
    result = aggregate(WEEK, bonuses=bonuses)
    assert result.earnings == {"A": 50.0}

    month = Period(kind=PeriodKind.MONTH, start=date(2023, 12, 30), end=date(2024, 1, 31), label="x")
    assert aggregate(month, bonuses=bonuses).earnings == {}


def test_workers_without_qualifying_events_are_absent():
    sales = [SaleEvent(worker="A", sale_date=date(2024, 2, 1), gross_amount=100, commission_rate=0.1)]
    assert aggregate(WEEK, sales=sales).earnings == {}


def test_missing_streams_are_treated_as_empty():
    result = aggregate(WEEK, None, None, None)
    assert result.earnings == {}
    assert result.malformed_count == 0


def test_malformed_amounts_contribute_zero_without_aborting():
    sales = [
        SaleEvent(worker="A", sale_date=date(2024, 1, 2), gross_amount="not-a-number", commission_rate=0.1),
        SaleEvent(worker="A", sale_date=date(2024, 1, 2), gross_amount=float("nan"), commission_rate=0.1),
        SaleEvent(worker="B", sale_date=date(2024, 1, 2), gross_amount=200, commission_rate=None),
        SaleEvent(worker="B", sale_date=date(2024, 1, 3), gross_amount="100", commission_rate="0.5"),
    ]
    bonuses = [BonusEvent(worker="C", period_start=date(2024, 1, 1), bonus_amount=None)]
    result = aggregate(WEEK, sales=sales, bonuses=bonuses)
    assert result.earnings == {"A": 0.0, "B": pytest.approx(50.0), "C": 0.0}
    assert result.malformed_count == 4


def test_event_order_does_not_change_totals():
    sales = [
        SaleEvent(worker="A", sale_date=date(2024, 1, 2), gross_amount=10.5, commission_rate=0.2),
        SaleEvent(worker="B", sale_date=date(2024, 1, 4), gross_amount=300, commission_rate=0.1),
        SaleEvent(worker="A", sale_date=date(2024, 1, 5), gross_amount=99.9, commission_rate=0.2),
    ]
    forward = aggregate(WEEK, sales=sales).earnings
    backward = aggregate(WEEK, sales=list(reversed(sales))).earnings
    assert forward.keys() == backward.keys()
    for worker in forward:
        assert forward[worker] == pytest.approx(backward[worker])


def test_name_key_merges_workers_sharing_a_display_name():
    sales = [
        SaleEvent(worker="Sam", worker_id="u1", sale_date=date(2024, 1, 2), gross_amount=100, commission_rate=1),
        SaleEvent(worker="Sam", worker_id="u2", sale_date=date(2024, 1, 2), gross_amount=50, commission_rate=1),
    ]
    assert aggregate(WEEK, sales=sales).earnings == {"Sam": 150.0}
    assert aggregate(WEEK, sales=sales, key_mode=WORKER_KEY_ID).earnings == {"u1": 100.0, "u2": 50.0}


def test_deleted_workers_and_team_scope_filter_by_worker_id():
    sales = [
        SaleEvent(worker="A", worker_id="u1", sale_date=date(2024, 1, 2), gross_amount=100, commission_rate=1),
        SaleEvent(worker="B", worker_id="u2", sale_date=date(2024, 1, 2), gross_amount=100, commission_rate=1),
        SaleEvent(worker="C", worker_id="u3", sale_date=date(2024, 1, 2), gross_amount=100, commission_rate=1),
        SaleEvent(worker="Legacy", sale_date=date(2024, 1, 2), gross_amount=100, commission_rate=1),
    ]
    result = aggregate(
        WEEK,
        sales=sales,
        exclude_worker_ids={"u2"},
        include_worker_ids={"u1", "u2"},
    )
    assert result.earnings == {"A": 100.0, "Legacy": 100.0}
