from __future__ import annotations

import math
from typing import List, Optional

from src.models.earnings import Achievement

# Highest threshold first.
ACHIEVEMENTS: List[Achievement] = [
    Achievement(threshold_amount=100000, tier_name="Diamond Elite"),
    Achievement(threshold_amount=50000, tier_name="$50K Club"),
    Achievement(threshold_amount=25000, tier_name="$25K Achiever"),
    Achievement(threshold_amount=10000, tier_name="$10K Milestone"),
    Achievement(threshold_amount=5000, tier_name="Rising Star"),
]


def earned(earnings: Optional[float], table: List[Achievement] = ACHIEVEMENTS) -> List[Achievement]:
    amount = _normalize(earnings)
    return [achievement for achievement in table if achievement.threshold_amount <= amount]


def evaluate(earnings: Optional[float], table: List[Achievement] = ACHIEVEMENTS) -> Optional[Achievement]:
    reached = earned(earnings, table)
    return reached[0] if reached else None


def next_milestone(
    earnings: Optional[float], table: List[Achievement] = ACHIEVEMENTS
) -> Optional[Achievement]:
    amount = _normalize(earnings)
    unearned = [achievement for achievement in table if achievement.threshold_amount > amount]
    return unearned[-1] if unearned else None


def _normalize(earnings: Optional[float]) -> float:
    if earnings is None or not math.isfinite(earnings):
        return 0.0
    return float(earnings)
