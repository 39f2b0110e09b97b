from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from src.models.earnings import RankEntry


@dataclass(frozen=True)
class Ranking:
    entries: List[RankEntry]
    total_sum: float
    active_count: int
    average: float
    _positions: Dict[str, int] = field(default_factory=dict, repr=False, compare=False)

    def rank_of(self, worker: str) -> Optional[int]:
        return self._positions.get(worker)

    def top(self, limit: int) -> List[RankEntry]:
        return self.entries[:limit]


def rank(earnings: Mapping[str, float]) -> Ranking:
    """Order workers by earnings, highest first.

    Equal earnings fall back to the worker key in ascending order, and every
    position gets its own rank (1, 2, 3, ... with no shared ranks), so the
    same input always yields the same ranking.
    """
    ordered = sorted(earnings.items(), key=lambda item: (-item[1], item[0]))
    entries = [
        RankEntry(worker=worker, earnings=amount, rank=index)
        for index, (worker, amount) in enumerate(ordered, start=1)
    ]
    total_sum = sum(entry.earnings for entry in entries)
    active_count = len(entries)
    average = total_sum / active_count if active_count else 0.0
    return Ranking(
        entries=entries,
        total_sum=total_sum,
        active_count=active_count,
        average=average,
        _positions={entry.worker: entry.rank for entry in entries},
    )
