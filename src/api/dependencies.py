from __future__ import annotations

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header

from src.core.config import get_settings
from src.core.errors import UnauthorizedError
from src.models.access import CallerContext, Role
from src.repositories.access_repository import AccessRepository
from src.repositories.earnings_repository import EarningsRepository
from src.services.access_control_service import AccessControlService
from src.services.achievements_service import AchievementsService
from src.services.earnings_trends_service import EarningsTrendsService
from src.services.income_events_service import IncomeEventsService
from src.services.leaderboard_service import LeaderboardService
from src.services.rank_trajectory_service import RankTrajectoryService


@lru_cache
def get_earnings_repository() -> EarningsRepository:
    return EarningsRepository()


@lru_cache
def get_access_repository() -> AccessRepository:
    return AccessRepository()


def get_income_events_service() -> IncomeEventsService:
    settings = get_settings()
    return IncomeEventsService(
        repository=get_earnings_repository(),
        week_start_weekday=settings.week_start_weekday,
        worker_key=settings.worker_key,
        max_workers=settings.trajectory_max_workers,
    )


def get_leaderboard_service() -> LeaderboardService:
    return LeaderboardService(
        events_service=get_income_events_service(),
        chart_size=get_settings().leaderboard_chart_size,
    )


def get_rank_trajectory_service() -> RankTrajectoryService:
    return RankTrajectoryService(events_service=get_income_events_service())


def get_earnings_trends_service() -> EarningsTrendsService:
    return EarningsTrendsService(events_service=get_income_events_service())


def get_achievements_service() -> AchievementsService:
    return AchievementsService()


def get_access_control_service() -> AccessControlService:
    settings = get_settings()
    simulated_role: Optional[Role] = None
    if settings.role_simulation and not settings.is_production:
        simulated_role = Role.parse(settings.role_simulation)
    return AccessControlService(repository=get_access_repository(), role_simulation=simulated_role)


def get_access_token(authorization: Optional[str] = Header(default=None)) -> Optional[str]:
    if not authorization or not authorization.startswith("Bearer "):
        return None
    token = authorization[len("Bearer ") :].strip()
    return token or None


def get_optional_caller(
    access_token: Optional[str] = Depends(get_access_token),
    service: AccessControlService = Depends(get_access_control_service),
) -> Optional[CallerContext]:
    return service.resolve_caller(access_token)


def require_caller(
    caller: Optional[CallerContext] = Depends(get_optional_caller),
) -> CallerContext:
    if caller is None:
        raise UnauthorizedError()
    if not caller.is_approved:
        raise UnauthorizedError("Account is not approved")
    return caller
