from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Dict, List, Optional

from src.analytics.earnings import WORKER_KEY_ID
from src.core.errors import BadRequestError
from src.models.earnings import PeriodKind
from src.schemas.trends import ChatterTrend, TeamTrend, TrendDataPoint
from src.services.income_events_service import IncomeEventsService
from src.shared.time import today_in_reporting_tz

MAX_TREND_PERIODS = 52
TOP_CHATTER_TRENDS = 8


class EarningsTrendsService:
    def __init__(self, events_service: IncomeEventsService) -> None:
        self.events_service = events_service

    def get_chatter_trends(
        self, kind: PeriodKind, periods: int, reference: Optional[date] = None
    ) -> List[ChatterTrend]:
        self._validate(kind, periods)
        scope = self.events_service.load_scope()
        window = self.events_service.aggregate_window(
            kind, periods, reference or today_in_reporting_tz(), scope
        )
        labels = [period.label for period, _ in window]
        by_worker: Dict[str, List[float]] = defaultdict(lambda: [0.0] * len(window))
        for index, (_, result) in enumerate(window):
            for worker, amount in result.earnings.items():
                by_worker[worker][index] += amount

        ordered = sorted(by_worker.items(), key=lambda item: (-sum(item[1]), item[0]))
        return [
            ChatterTrend(name=worker, data=self._points(labels, values))
            for worker, values in ordered[:TOP_CHATTER_TRENDS]
        ]

    def get_team_trends(
        self, kind: PeriodKind, periods: int, reference: Optional[date] = None
    ) -> List[TeamTrend]:
        self._validate(kind, periods)
        teams = self.events_service.repository.list_teams()
        team_by_worker = self.events_service.repository.list_profile_teams()
        scope = self.events_service.load_scope()
        window = self.events_service.aggregate_window(
            kind,
            periods,
            reference or today_in_reporting_tz(),
            scope,
            # Team attribution needs the stable worker id whatever the leaderboard key is.
            key_mode=WORKER_KEY_ID,
        )
        labels = [period.label for period, _ in window]
        by_team: Dict[str, List[float]] = {team.id: [0.0] * len(window) for team in teams}
        for index, (_, result) in enumerate(window):
            for worker_id, amount in result.earnings.items():
                team_id = team_by_worker.get(worker_id)
                if team_id in by_team:
                    by_team[team_id][index] += amount

        return [
            TeamTrend(
                id=team.id,
                name=team.name,
                color=team.color,
                data=self._points(labels, by_team[team.id]),
            )
            for team in teams
        ]

    @staticmethod
    def _points(labels: List[str], values: List[float]) -> List[TrendDataPoint]:
        return [
            TrendDataPoint(period=label, earnings=round(value, 2)) for label, value in zip(labels, values)
        ]

    @staticmethod
    def _validate(kind: PeriodKind, periods: int) -> None:
        if kind == PeriodKind.QUARTER:
            raise BadRequestError("Trends support week or month periods")
        if periods < 1 or periods > MAX_TREND_PERIODS:
            raise BadRequestError(f"periods must be between 1 and {MAX_TREND_PERIODS}")
