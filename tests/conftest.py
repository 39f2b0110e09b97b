from __future__ import annotations

import os
from datetime import date
from threading import Lock
from typing import Dict, List, Optional

os.environ.setdefault("SUPABASE_URL", "http://supabase.test")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")

import pytest
from fastapi.testclient import TestClient

from src.api.dependencies import get_optional_caller
from src.main import create_app
from src.models.access import CallerContext, ProfileStatus, Role
from src.models.earnings import BonusEvent, HoursEvent, SaleEvent, Team
from src.services.income_events_service import IncomeEventsService


class StubEarningsRepository:
    def __init__(
        self,
        sales: Optional[List[SaleEvent]] = None,
        hours: Optional[List[HoursEvent]] = None,
        bonuses: Optional[List[BonusEvent]] = None,
        teams: Optional[List[Team]] = None,
        profile_teams: Optional[Dict[str, str]] = None,
        deleted_ids: Optional[set[str]] = None,
    ) -> None:
        self.sales = sales or []
        self.hours = hours or []
        self.bonuses = bonuses or []
        self.teams = teams or []
        self.profile_teams = profile_teams or {}
        self.deleted_ids = deleted_ids or set()
        self.sales_calls: List[tuple[date, date]] = []
        self._lock = Lock()

    def list_sales(self, start_date: date, end_date: date) -> List[SaleEvent]:
        with self._lock:
            self.sales_calls.append((start_date, end_date))
        return [
            event
            for event in self.sales
            if event.sale_date is not None and start_date <= event.sale_date <= end_date
        ]

    def list_hours(self, start_date: date, end_date: date) -> List[HoursEvent]:
        return [
            event
            for event in self.hours
            if event.work_date is not None and start_date <= event.work_date <= end_date
        ]

    def list_bonuses(self, period_start: date) -> List[BonusEvent]:
        return [event for event in self.bonuses if event.period_start == period_start]

    def list_team_member_ids(self, team_id: str) -> set[str]:
        return {worker_id for worker_id, member_team in self.profile_teams.items() if member_team == team_id}

    def list_deleted_worker_ids(self) -> set[str]:
        return set(self.deleted_ids)

    def list_teams(self) -> List[Team]:
        return list(self.teams)

    def list_profile_teams(self) -> Dict[str, str]:
        return dict(self.profile_teams)


@pytest.fixture()
def stub_repository():
    return StubEarningsRepository


@pytest.fixture()
def events_service_factory():
    def build(repository: StubEarningsRepository, **kwargs: object) -> IncomeEventsService:
        return IncomeEventsService(repository=repository, **kwargs)  # type: ignore[arg-type]

    return build


@pytest.fixture()
def approved_caller() -> CallerContext:
    return CallerContext(user_id="user-1", role=Role.ADMIN, status=ProfileStatus.APPROVED)


@pytest.fixture()
def app():
    return create_app()


@pytest.fixture()
def client(app, approved_caller: CallerContext) -> TestClient:
    app.dependency_overrides[get_optional_caller] = lambda: approved_caller
    return TestClient(app)


@pytest.fixture()
def anonymous_client(app) -> TestClient:
    app.dependency_overrides[get_optional_caller] = lambda: None
    return TestClient(app)
