from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import ConfigDict, Field

from src.models.earnings import PeriodKind
from src.shared.base import BaseSchema


class LeaderboardFilters(BaseSchema):
    # Query parameters are camelCase on the wire; specificMonth is 1-based (1 = January).
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    timeframe: PeriodKind = PeriodKind.MONTH
    team_id: Optional[str] = None
    specific_month: Optional[int] = Field(default=None, ge=1, le=12)
    specific_year: Optional[int] = Field(default=None, ge=2020, le=2100)

    @property
    def month_selection(self) -> Optional[tuple[int, int]]:
        if self.specific_month is None or self.specific_year is None:
            return None
        return self.specific_month, self.specific_year

    @property
    def scoped_team_id(self) -> Optional[str]:
        if not self.team_id or self.team_id == "all":
            return None
        return self.team_id


class ChatterPerformance(BaseSchema):
    name: str
    sales: float
    rank: int


class ChartDatum(BaseSchema):
    name: str
    value: float


class LeaderboardResponse(BaseSchema):
    top_chatters: List[ChatterPerformance] = Field(default_factory=list)
    total_sales: float = 0.0
    active_chatters: int = 0
    avg_per_chatter: float = 0.0
    chart_data: List[ChartDatum] = Field(default_factory=list)
    period_start: Optional[date] = None
    period_end: Optional[date] = None
    period_label: Optional[str] = None

    @classmethod
    def empty(cls) -> "LeaderboardResponse":
        return cls()
