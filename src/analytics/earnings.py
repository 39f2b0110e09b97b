from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import AbstractSet, Dict, Iterable, Optional, Union

from src.models.earnings import BonusEvent, HoursEvent, Period, SaleEvent, is_usable_amount

WORKER_KEY_NAME = "name"
WORKER_KEY_ID = "id"

IncomeEvent = Union[SaleEvent, HoursEvent, BonusEvent]


@dataclass
class AggregationResult:
    earnings: Dict[str, float] = field(default_factory=dict)
    malformed_count: int = 0


def worker_key(event: IncomeEvent, key_mode: str = WORKER_KEY_NAME) -> str:
    if key_mode == WORKER_KEY_ID and event.worker_id:
        return event.worker_id
    return event.worker


def aggregate(
    period: Period,
    sales: Optional[Iterable[SaleEvent]] = None,
    hours: Optional[Iterable[HoursEvent]] = None,
    bonuses: Optional[Iterable[BonusEvent]] = None,
    key_mode: str = WORKER_KEY_NAME,
    exclude_worker_ids: Optional[AbstractSet[str]] = None,
    include_worker_ids: Optional[AbstractSet[str]] = None,
) -> AggregationResult:
    """Sum each worker's sales commission, hourly pay and bonus for ``period``.

    Sales and hours are range-filtered on their dates. Bonuses are anchored to
    a period start and only count when it equals ``period.start`` exactly.
    Missing or non-finite amounts contribute nothing and are counted in
    ``malformed_count``. Workers without a qualifying event are absent.

    ``include_worker_ids`` scopes to a team; events without a worker id are
    kept because they cannot be attributed to any team.
    """
    totals: Dict[str, float] = defaultdict(float)
    malformed = 0

    def admit(event: IncomeEvent) -> bool:
        if event.worker_id and exclude_worker_ids and event.worker_id in exclude_worker_ids:
            return False
        if include_worker_ids is not None and event.worker_id:
            return event.worker_id in include_worker_ids
        return True

    for sale in sales or ():
        if sale.sale_date is None or not period.contains(sale.sale_date) or not admit(sale):
            continue
        contribution, bad = _product(sale.gross_amount, sale.commission_rate)
        malformed += bad
        totals[worker_key(sale, key_mode)] += contribution

    for entry in hours or ():
        if entry.work_date is None or not period.contains(entry.work_date) or not admit(entry):
            continue
        contribution, bad = _product(entry.hours_worked, entry.hourly_rate)
        malformed += bad
        totals[worker_key(entry, key_mode)] += contribution

    for bonus in bonuses or ():
        if bonus.period_start != period.start or not admit(bonus):
            continue
        usable = is_usable_amount(bonus.bonus_amount)
        malformed += 0 if usable else 1
        totals[worker_key(bonus, key_mode)] += bonus.bonus_amount if usable else 0.0

    return AggregationResult(earnings=dict(totals), malformed_count=malformed)


def _product(amount: Optional[float], rate: Optional[float]) -> tuple[float, int]:
    if is_usable_amount(amount) and is_usable_amount(rate):
        return amount * rate, 0
    return 0.0, 1
