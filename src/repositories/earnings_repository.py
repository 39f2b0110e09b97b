from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

from src.core.supabase import SupabaseClient
from src.models.earnings import BonusEvent, HoursEvent, SaleEvent, Team, coerce_amount, is_usable_amount

MAX_QUERY_ROWS = 10000


class EarningsRepository:
    def __init__(self) -> None:
        self.client = SupabaseClient()

    def list_sales(self, start_date: date, end_date: date) -> List[SaleEvent]:
        rows = self.client.select(
            table="chatter_sheet_daily_sales",
            select="sale_date,sales_amount,chatter_sheets!inner(chatter_name,chatter_user_id,commission_rate)",
            filters=[
                ("sale_date", f"gte.{start_date.isoformat()}"),
                ("sale_date", f"lte.{end_date.isoformat()}"),
            ],
            limit=MAX_QUERY_ROWS,
        )
        events: List[SaleEvent] = []
        for row in rows:
            sheet = self._sheet(row)
            events.append(
                SaleEvent(
                    worker=str(sheet.get("chatter_name") or ""),
                    worker_id=self._optional_str(sheet.get("chatter_user_id")),
                    sale_date=self._optional_to_date(row.get("sale_date")),
                    gross_amount=row.get("sales_amount"),
                    commission_rate=self._percent_to_fraction(sheet.get("commission_rate")),
                )
            )
        return events

    def list_hours(self, start_date: date, end_date: date) -> List[HoursEvent]:
        rows = self.client.select(
            table="chatter_daily_hours",
            select="work_date,hours_worked,chatter_sheets!inner(chatter_name,chatter_user_id,hourly_rate)",
            filters=[
                ("work_date", f"gte.{start_date.isoformat()}"),
                ("work_date", f"lte.{end_date.isoformat()}"),
            ],
            limit=MAX_QUERY_ROWS,
        )
        events: List[HoursEvent] = []
        for row in rows:
            sheet = self._sheet(row)
            events.append(
                HoursEvent(
                    worker=str(sheet.get("chatter_name") or ""),
                    worker_id=self._optional_str(sheet.get("chatter_user_id")),
                    work_date=self._optional_to_date(row.get("work_date")),
                    hours_worked=row.get("hours_worked"),
                    hourly_rate=sheet.get("hourly_rate"),
                )
            )
        return events

    def list_bonuses(self, period_start: date) -> List[BonusEvent]:
        rows = self.client.select(
            table="chatter_sheets",
            select="chatter_name,chatter_user_id,bonus,week_start_date",
            filters=[("week_start_date", f"eq.{period_start.isoformat()}")],
            limit=MAX_QUERY_ROWS,
        )
        return [
            BonusEvent(
                worker=str(row.get("chatter_name") or ""),
                worker_id=self._optional_str(row.get("chatter_user_id")),
                period_start=self._optional_to_date(row.get("week_start_date")),
                bonus_amount=row.get("bonus"),
            )
            for row in rows
        ]

    def list_team_member_ids(self, team_id: str) -> set[str]:
        rows = self.client.select(
            table="profiles",
            select="id",
            filters=[("team_id", f"eq.{team_id}")],
            limit=MAX_QUERY_ROWS,
        )
        return {str(row["id"]) for row in rows if row.get("id")}

    def list_deleted_worker_ids(self) -> set[str]:
        rows = self.client.select(
            table="profiles",
            select="id",
            filters=[("status", "eq.deleted")],
            limit=MAX_QUERY_ROWS,
        )
        return {str(row["id"]) for row in rows if row.get("id")}

    def list_teams(self) -> List[Team]:
        rows = self.client.select(
            table="teams",
            select="id,name,color_hex",
            limit=MAX_QUERY_ROWS,
            order="name.asc",
        )
        return [
            Team(id=str(row["id"]), name=str(row.get("name") or ""), color=row.get("color_hex"))
            for row in rows
            if row.get("id")
        ]

    def list_profile_teams(self) -> Dict[str, str]:
        rows = self.client.select(
            table="profiles",
            select="id,team_id",
            filters=[("team_id", "not.is.null")],
            limit=MAX_QUERY_ROWS,
        )
        return {str(row["id"]): str(row["team_id"]) for row in rows if row.get("id") and row.get("team_id")}

    @staticmethod
    def _sheet(row: Dict[str, Any]) -> Dict[str, Any]:
        sheet = row.get("chatter_sheets")
        # PostgREST embeds a to-one relation as an object, but older views return a list.
        if isinstance(sheet, list):
            sheet = sheet[0] if sheet else None
        return sheet if isinstance(sheet, dict) else {}

    @staticmethod
    def _percent_to_fraction(value: object) -> Optional[float]:
        # chatter_sheets.commission_rate is stored as a percentage (8 means 8%).
        rate = coerce_amount(value)
        if not is_usable_amount(rate):
            return rate
        return rate / 100

    @staticmethod
    def _optional_str(value: object) -> Optional[str]:
        if value in (None, ""):
            return None
        return str(value)

    @staticmethod
    def _optional_to_date(value: object) -> Optional[date]:
        if value in (None, ""):
            return None
        if isinstance(value, date):
            return value
        try:
            return date.fromisoformat(str(value)[:10])
        except ValueError:
            return None
