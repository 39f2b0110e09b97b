from __future__ import annotations

import math
from datetime import date
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class PeriodKind(str, Enum):
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"


class Period(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: PeriodKind
    start: date
    end: date
    label: str

    def contains(self, value: date) -> bool:
        return self.start <= value <= self.end


def coerce_amount(value: Any) -> Optional[float]:
    """Parse a numeric column; anything unparsable becomes ``None``.

    NaN and infinities are kept as floats so the aggregator can count them
    as malformed alongside missing values.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).strip())
    except ValueError:
        return None


def is_usable_amount(value: Optional[float]) -> bool:
    return value is not None and math.isfinite(value)


class _IncomeEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    worker: str
    worker_id: Optional[str] = None


class SaleEvent(_IncomeEvent):
    sale_date: Optional[date] = None
    gross_amount: Optional[float] = None
    commission_rate: Optional[float] = None

    @field_validator("gross_amount", "commission_rate", mode="before")
    @classmethod
    def parse_amount(cls, value: Any) -> Optional[float]:
        return coerce_amount(value)


class HoursEvent(_IncomeEvent):
    work_date: Optional[date] = None
    hours_worked: Optional[float] = None
    hourly_rate: Optional[float] = None

    @field_validator("hours_worked", "hourly_rate", mode="before")
    @classmethod
    def parse_amount(cls, value: Any) -> Optional[float]:
        return coerce_amount(value)


class BonusEvent(_IncomeEvent):
    period_start: Optional[date] = None
    bonus_amount: Optional[float] = None

    @field_validator("bonus_amount", mode="before")
    @classmethod
    def parse_amount(cls, value: Any) -> Optional[float]:
        return coerce_amount(value)


class RankEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    worker: str
    earnings: float
    rank: int


class RankPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    period_label: str
    rank: int


class Achievement(BaseModel):
    model_config = ConfigDict(frozen=True)

    threshold_amount: float
    tier_name: str


class Team(BaseModel):
    id: str
    name: str
    color: Optional[str] = None
