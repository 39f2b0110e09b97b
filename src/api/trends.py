from __future__ import annotations

from datetime import date
from typing import List

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_earnings_trends_service, require_caller
from src.models.access import CallerContext
from src.models.earnings import PeriodKind
from src.schemas.trends import ChatterTrend, TeamTrend
from src.services.earnings_trends_service import MAX_TREND_PERIODS, EarningsTrendsService
from src.shared.response import Meta, ResponseEnvelope

router = APIRouter(prefix="/trends", tags=["trends"])


def _trend_meta(kind: PeriodKind, periods: int) -> Meta:
    return Meta(
        as_of_date=date.today().isoformat(),
        source="chatter_sheet_daily_sales,chatter_daily_hours,chatter_sheets",
        time_window=f"{periods}{kind.value[0]}",
        calculation_version="v1",
    )


@router.get("/chatters")
def chatter_trends(
    kind: PeriodKind = Query(default=PeriodKind.WEEK),
    periods: int = Query(default=8, ge=1, le=MAX_TREND_PERIODS),
    _: CallerContext = Depends(require_caller),
    service: EarningsTrendsService = Depends(get_earnings_trends_service),
) -> ResponseEnvelope[List[ChatterTrend]]:
    return ResponseEnvelope(data=service.get_chatter_trends(kind, periods), meta=_trend_meta(kind, periods))


@router.get("/teams")
def team_trends(
    kind: PeriodKind = Query(default=PeriodKind.WEEK),
    periods: int = Query(default=8, ge=1, le=MAX_TREND_PERIODS),
    _: CallerContext = Depends(require_caller),
    service: EarningsTrendsService = Depends(get_earnings_trends_service),
) -> ResponseEnvelope[List[TeamTrend]]:
    return ResponseEnvelope(data=service.get_team_trends(kind, periods), meta=_trend_meta(kind, periods))
