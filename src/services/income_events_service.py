from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import date
from typing import FrozenSet, List, Optional, Tuple

from src.analytics.earnings import WORKER_KEY_NAME, AggregationResult, aggregate
from src.analytics.periods import SATURDAY, resolve_period
from src.models.earnings import BonusEvent, HoursEvent, Period, PeriodKind, SaleEvent
from src.repositories.earnings_repository import EarningsRepository

logger = logging.getLogger(__name__)

STREAM_FETCH_WORKERS = 3


@dataclass(frozen=True)
class WorkerScope:
    deleted_worker_ids: FrozenSet[str] = frozenset()
    team_member_ids: Optional[FrozenSet[str]] = None


@dataclass
class PeriodEvents:
    period: Period
    sales: List[SaleEvent] = field(default_factory=list)
    hours: List[HoursEvent] = field(default_factory=list)
    bonuses: List[BonusEvent] = field(default_factory=list)


class IncomeEventsService:
    def __init__(
        self,
        repository: EarningsRepository,
        week_start_weekday: int = SATURDAY,
        worker_key: str = WORKER_KEY_NAME,
        max_workers: int = 4,
    ) -> None:
        self.repository = repository
        self.week_start_weekday = week_start_weekday
        self.worker_key = worker_key
        self.max_workers = max_workers

    def load_scope(self, team_id: Optional[str] = None) -> WorkerScope:
        deleted_ids = frozenset(self.repository.list_deleted_worker_ids())
        if not team_id or team_id == "all":
            return WorkerScope(deleted_worker_ids=deleted_ids)
        member_ids = frozenset(self.repository.list_team_member_ids(team_id))
        return WorkerScope(deleted_worker_ids=deleted_ids, team_member_ids=member_ids)

    def fetch_period(self, period: Period) -> PeriodEvents:
        """Fetch the three income streams for one period concurrently.

        A failure in any stream propagates; there is no partial result.
        """
        with ThreadPoolExecutor(max_workers=STREAM_FETCH_WORKERS) as executor:
            sales_future = executor.submit(self.repository.list_sales, period.start, period.end)
            hours_future = executor.submit(self.repository.list_hours, period.start, period.end)
            bonuses_future = executor.submit(self.repository.list_bonuses, period.start)
            try:
                return PeriodEvents(
                    period=period,
                    sales=sales_future.result(),
                    hours=hours_future.result(),
                    bonuses=bonuses_future.result(),
                )
            except Exception:
                logger.error("Income fetch failed for %s (%s)", period.label, period.start.isoformat())
                for future in (sales_future, hours_future, bonuses_future):
                    future.cancel()
                raise

    def aggregate_period(
        self, period: Period, scope: WorkerScope, key_mode: Optional[str] = None
    ) -> AggregationResult:
        events = self.fetch_period(period)
        result = aggregate(
            period,
            events.sales,
            events.hours,
            events.bonuses,
            key_mode=key_mode or self.worker_key,
            exclude_worker_ids=scope.deleted_worker_ids,
            include_worker_ids=scope.team_member_ids,
        )
        if result.malformed_count:
            logger.warning(
                "Coerced %d malformed income events to zero for %s",
                result.malformed_count,
                period.label,
            )
        return result

    def aggregate_window(
        self,
        kind: PeriodKind,
        periods: int,
        reference: date,
        scope: WorkerScope,
        key_mode: Optional[str] = None,
    ) -> List[Tuple[Period, AggregationResult]]:
        """Aggregate ``periods`` consecutive periods ending with the one containing ``reference``.

        Periods run on a bounded pool; the result is always oldest first.
        """
        window = [
            resolve_period(kind, offset, reference, self.week_start_weekday)
            for offset in range(periods - 1, -1, -1)
        ]
        with ThreadPoolExecutor(max_workers=min(self.max_workers, max(len(window), 1))) as executor:
            results = list(
                executor.map(lambda period: self.aggregate_period(period, scope, key_mode), window)
            )
        return list(zip(window, results))
