from __future__ import annotations

from datetime import date
from typing import List, Optional

from src.analytics.ranking import rank
from src.core.errors import BadRequestError
from src.models.earnings import PeriodKind, RankPoint
from src.services.income_events_service import IncomeEventsService
from src.shared.time import today_in_reporting_tz

MAX_PERIODS_BACK = 52


class RankTrajectoryService:
    def __init__(self, events_service: IncomeEventsService) -> None:
        self.events_service = events_service

    def get_rank_trajectory(
        self,
        worker: str,
        kind: PeriodKind,
        periods_back: int,
        reference: Optional[date] = None,
        team_id: Optional[str] = None,
    ) -> List[RankPoint]:
        """One rank per period, oldest first, ending with the period containing ``reference``.

        A worker with no earnings in a period is placed one below the last
        ranked worker of that period so the series has no gaps.
        """
        if kind == PeriodKind.QUARTER:
            raise BadRequestError("Rank trajectories support week or month periods")
        if periods_back < 1 or periods_back > MAX_PERIODS_BACK:
            raise BadRequestError(f"periodsBack must be between 1 and {MAX_PERIODS_BACK}")

        scope = self.events_service.load_scope(team_id)
        window = self.events_service.aggregate_window(
            kind, periods_back, reference or today_in_reporting_tz(), scope
        )
        points: List[RankPoint] = []
        for period, result in window:
            ranking = rank(result.earnings)
            position = ranking.rank_of(worker)
            points.append(
                RankPoint(
                    period_label=period.label,
                    rank=position if position is not None else ranking.active_count + 1,
                )
            )
        return points
