from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from src.analytics.periods import resolve_timeframe
from src.analytics.ranking import rank
from src.models.access import CallerContext
from src.schemas.leaderboard import (
    ChartDatum,
    ChatterPerformance,
    LeaderboardFilters,
    LeaderboardResponse,
)
from src.services.income_events_service import IncomeEventsService
from src.shared.time import today_in_reporting_tz

logger = logging.getLogger(__name__)


class LeaderboardService:
    def __init__(self, events_service: IncomeEventsService, chart_size: int = 8) -> None:
        self.events_service = events_service
        self.chart_size = chart_size

    def get_leaderboard(
        self,
        filters: LeaderboardFilters,
        caller: Optional[CallerContext],
        reference: Optional[date] = None,
    ) -> LeaderboardResponse:
        if caller is None or not caller.is_approved:
            logger.info("Leaderboard requested without an approved caller; returning empty state")
            return LeaderboardResponse.empty()

        period = resolve_timeframe(
            filters.timeframe,
            reference or today_in_reporting_tz(),
            filters.month_selection,
            self.events_service.week_start_weekday,
        )
        scope = self.events_service.load_scope(filters.scoped_team_id)
        result = self.events_service.aggregate_period(period, scope)
        ranking = rank(result.earnings)
        if ranking.active_count == 0:
            return LeaderboardResponse.empty()

        return LeaderboardResponse(
            top_chatters=[
                ChatterPerformance(name=entry.worker, sales=round(entry.earnings, 2), rank=entry.rank)
                for entry in ranking.entries
            ],
            total_sales=round(ranking.total_sum, 2),
            active_chatters=ranking.active_count,
            avg_per_chatter=round(ranking.average, 2),
            chart_data=[
                ChartDatum(name=entry.worker, value=round(entry.earnings, 2))
                for entry in ranking.top(self.chart_size)
            ],
            period_start=period.start,
            period_end=period.end,
            period_label=period.label,
        )
