from __future__ import annotations

from typing import Optional

from src.analytics.achievements import earned, evaluate, next_milestone
from src.models.earnings import Achievement
from src.schemas.chatters import AchievementSummary, AchievementTier


class AchievementsService:
    def get_achievement(self, earnings: float) -> Optional[str]:
        achievement = evaluate(earnings)
        return achievement.tier_name if achievement else None

    def get_next_milestone(self, earnings: float) -> Optional[AchievementTier]:
        milestone = next_milestone(earnings)
        return self._to_tier(milestone) if milestone else None

    def get_summary(self, earnings: float) -> AchievementSummary:
        return AchievementSummary(
            earnings=earnings,
            achievement=self.get_achievement(earnings),
            next_milestone=self.get_next_milestone(earnings),
            earned=[self._to_tier(achievement) for achievement in earned(earnings)],
        )

    @staticmethod
    def _to_tier(achievement: Achievement) -> AchievementTier:
        return AchievementTier(
            tier_name=achievement.tier_name,
            threshold_amount=achievement.threshold_amount,
        )
