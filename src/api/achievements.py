from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_achievements_service
from src.schemas.chatters import AchievementSummary
from src.services.achievements_service import AchievementsService
from src.shared.response import Meta, ResponseEnvelope

router = APIRouter(prefix="/achievements", tags=["achievements"])


@router.get("")
def achievements(
    earnings: float = Query(..., ge=0),
    service: AchievementsService = Depends(get_achievements_service),
) -> ResponseEnvelope[AchievementSummary]:
    meta = Meta(
        as_of_date=date.today().isoformat(),
        source="achievement_tiers",
        time_window="n/a",
        calculation_version="v1",
    )
    return ResponseEnvelope(data=service.get_summary(earnings), meta=meta)
