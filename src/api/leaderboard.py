from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_leaderboard_service, get_optional_caller
from src.models.access import CallerContext
from src.models.earnings import PeriodKind
from src.schemas.leaderboard import LeaderboardFilters, LeaderboardResponse
from src.services.leaderboard_service import LeaderboardService
from src.shared.response import Meta, ResponseEnvelope

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


def get_leaderboard_filters(
    timeframe: PeriodKind = Query(default=PeriodKind.MONTH),
    team_id: Optional[str] = Query(default=None, alias="teamId"),
    specific_month: Optional[int] = Query(default=None, alias="specificMonth", ge=1, le=12),
    specific_year: Optional[int] = Query(default=None, alias="specificYear", ge=2020, le=2100),
) -> LeaderboardFilters:
    return LeaderboardFilters(
        timeframe=timeframe,
        team_id=team_id,
        specific_month=specific_month,
        specific_year=specific_year,
    )


@router.get("")
def leaderboard(
    filters: LeaderboardFilters = Depends(get_leaderboard_filters),
    caller: Optional[CallerContext] = Depends(get_optional_caller),
    service: LeaderboardService = Depends(get_leaderboard_service),
) -> ResponseEnvelope[LeaderboardResponse]:
    data = service.get_leaderboard(filters, caller)
    meta = Meta(
        as_of_date=date.today().isoformat(),
        source="chatter_sheet_daily_sales,chatter_daily_hours,chatter_sheets",
        time_window=filters.timeframe.value,
        calculation_version="v1",
        period_start=data.period_start.isoformat() if data.period_start else None,
        period_end=data.period_end.isoformat() if data.period_end else None,
        team_id=filters.scoped_team_id,
    )
    return ResponseEnvelope(data=data, meta=meta)
