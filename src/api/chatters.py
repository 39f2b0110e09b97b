from __future__ import annotations

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_rank_trajectory_service, require_caller
from src.models.access import CallerContext
from src.models.earnings import PeriodKind
from src.schemas.chatters import RankTrajectoryPoint
from src.services.rank_trajectory_service import MAX_PERIODS_BACK, RankTrajectoryService
from src.shared.response import Meta, ResponseEnvelope

router = APIRouter(prefix="/chatters", tags=["chatters"])


@router.get("/{worker}/rank-trajectory")
def rank_trajectory(
    worker: str,
    kind: PeriodKind = Query(default=PeriodKind.WEEK),
    periods_back: int = Query(default=12, alias="periodsBack", ge=1, le=MAX_PERIODS_BACK),
    team_id: Optional[str] = Query(default=None, alias="teamId"),
    _: CallerContext = Depends(require_caller),
    service: RankTrajectoryService = Depends(get_rank_trajectory_service),
) -> ResponseEnvelope[List[RankTrajectoryPoint]]:
    points = service.get_rank_trajectory(worker, kind, periods_back, team_id=team_id)
    meta = Meta(
        as_of_date=date.today().isoformat(),
        source="chatter_sheet_daily_sales,chatter_daily_hours,chatter_sheets",
        time_window=f"{periods_back}{kind.value[0]}",
        calculation_version="v1",
        team_id=team_id,
    )
    return ResponseEnvelope(
        data=[RankTrajectoryPoint(period=point.period_label, rank=point.rank) for point in points],
        meta=meta,
    )
