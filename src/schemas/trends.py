from __future__ import annotations

from typing import List, Optional

from src.shared.base import BaseSchema


class TrendDataPoint(BaseSchema):
    period: str
    earnings: float


class ChatterTrend(BaseSchema):
    name: str
    data: List[TrendDataPoint]


class TeamTrend(BaseSchema):
    id: str
    name: str
    color: Optional[str] = None
    data: List[TrendDataPoint]
