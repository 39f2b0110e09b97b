from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from src.shared.base import BaseSchema


class RankTrajectoryPoint(BaseSchema):
    period: str
    rank: int


class AchievementTier(BaseSchema):
    tier_name: str
    threshold_amount: float


class AchievementSummary(BaseSchema):
    earnings: float
    achievement: Optional[str] = None
    next_milestone: Optional[AchievementTier] = None
    earned: List[AchievementTier] = Field(default_factory=list)
