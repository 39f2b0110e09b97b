from __future__ import annotations

import pytest

from src.analytics.achievements import earned, evaluate, next_milestone


@pytest.mark.parametrize(
    "earnings,expected",
    [
        (30000, "$25K Achiever"),
        (25000, "$25K Achiever"),
        (100000, "Diamond Elite"),
        (250000, "Diamond Elite"),
        (5000, "Rising Star"),
        (4999, None),
        (0, None),
    ],
)
def test_evaluate_returns_highest_reached_tier(earnings, expected):
    achievement = evaluate(earnings)
    assert (achievement.tier_name if achievement else None) == expected


def test_next_milestone_is_lowest_unreached_tier():
    milestone = next_milestone(4999)
    assert milestone is not None
    assert milestone.tier_name == "Rising Star"
    assert milestone.threshold_amount == 5000

    assert next_milestone(30000).threshold_amount == 50000


def test_next_milestone_is_none_when_every_tier_is_earned():
    assert next_milestone(100000) is None


def test_earned_lists_tiers_highest_first():
    assert [achievement.threshold_amount for achievement in earned(12000)] == [10000, 5000]


@pytest.mark.parametrize("value", [None, float("nan")])
def test_missing_earnings_are_treated_as_zero(value):
    assert evaluate(value) is None
    assert next_milestone(value).tier_name == "Rising Star"
