from __future__ import annotations

from typing import Any, Dict, Optional

from src.core.supabase import SupabaseClient


class AccessRepository:
    def __init__(self) -> None:
        self.client = SupabaseClient()

    def get_user(self, access_token: str) -> Optional[Dict[str, Any]]:
        return self.client.get_user(access_token)

    def get_role(self, user_id: str) -> Optional[str]:
        rows = self.client.select(
            table="user_roles",
            select="role",
            filters=[("user_id", f"eq.{user_id}")],
            limit=1,
        )
        return str(rows[0].get("role")) if rows and rows[0].get("role") else None

    def get_profile_status(self, user_id: str) -> Optional[str]:
        rows = self.client.select(
            table="profiles",
            select="status",
            filters=[("id", f"eq.{user_id}")],
            limit=1,
        )
        return str(rows[0].get("status")) if rows and rows[0].get("status") else None
