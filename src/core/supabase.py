from __future__ import annotations

import logging
from threading import Lock
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlencode

import httpx

from src.core.config import get_settings
from src.core.errors import FetchFailureError

logger = logging.getLogger(__name__)


class SupabaseClient:
    _shared_client: httpx.Client | None = None
    _client_lock: Lock = Lock()

    def __init__(self) -> None:
        settings = get_settings()
        root_url = settings.supabase_url.rstrip("/")
        self.base_url = root_url + "/rest/v1"
        self.auth_url = root_url + "/auth/v1"
        self.api_key = settings.supabase_service_role_key or settings.supabase_anon_key
        if not self.api_key:
            raise ValueError("Supabase API key is required")
        self._client = self._get_shared_client(settings.supabase_timeout_seconds)

    @classmethod
    def _get_shared_client(cls, timeout: float) -> httpx.Client:
        if cls._shared_client is not None:
            return cls._shared_client
        with cls._client_lock:
            if cls._shared_client is None:
                cls._shared_client = httpx.Client(
                    timeout=timeout,
                    limits=httpx.Limits(max_keepalive_connections=20, max_connections=100),
                )
        return cls._shared_client

    def select(
        self,
        table: str,
        select: str,
        filters: Optional[List[Tuple[str, str]]] = None,
        limit: Optional[int] = None,
        order: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        params: List[Tuple[str, str]] = [("select", select)]
        if filters:
            params.extend(filters)
        if limit is not None:
            params.append(("limit", str(limit)))
        if order:
            params.append(("order", order))

        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
        }
        url = f"{self.base_url}/{table}?{urlencode(params, doseq=True)}"
        try:
            response = self._client.get(url, headers=headers)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error("Supabase select on %s failed: %s", table, exc)
            raise FetchFailureError(source=table) from exc
        data = response.json()
        if isinstance(data, list):
            return data
        if isinstance(data, dict):
            return [data]
        return []

    def get_user(self, access_token: str) -> Optional[Dict[str, Any]]:
        """Resolve a caller's access token; ``None`` when Supabase rejects it."""
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {access_token}",
        }
        try:
            response = self._client.get(f"{self.auth_url}/user", headers=headers)
        except httpx.HTTPError as exc:
            logger.error("Supabase auth lookup failed: %s", exc)
            raise FetchFailureError(source="auth") from exc
        if response.status_code in (401, 403):
            return None
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error("Supabase auth lookup failed: %s", exc)
            raise FetchFailureError(source="auth") from exc
        payload = response.json()
        if not isinstance(payload, dict) or not payload.get("id"):
            return None
        return payload
