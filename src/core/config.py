from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Ignore unrelated env keys so the frontend and backend can share one .env.
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Chatter Earnings Backend"
    environment: str = "development"
    api_prefix: str = "/api/v1"
    cors_allow_origins: str = "http://localhost:5173,http://127.0.0.1:5173"
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    supabase_url: str = Field(..., alias="SUPABASE_URL")
    supabase_service_role_key: Optional[str] = Field(
        default=None, alias="SUPABASE_SERVICE_ROLE_KEY"
    )
    supabase_anon_key: Optional[str] = Field(default=None, alias="SUPABASE_ANON_KEY")
    supabase_timeout_seconds: float = Field(default=30.0, alias="SUPABASE_TIMEOUT_SECONDS")

    # date.weekday() numbering: Monday=0 .. Sunday=6. Weeks start on Saturday.
    week_start_weekday: int = Field(default=5, ge=0, le=6, alias="WEEK_START_WEEKDAY")
    reporting_timezone: str = Field(default="America/New_York", alias="REPORTING_TIMEZONE")
    worker_key: str = Field(default="name", pattern="^(name|id)$", alias="WORKER_KEY")
    trajectory_max_workers: int = Field(default=4, ge=1, le=32, alias="TRAJECTORY_MAX_WORKERS")
    leaderboard_chart_size: int = Field(default=8, ge=1, le=50, alias="LEADERBOARD_CHART_SIZE")

    # Local testing only; ignored in production.
    role_simulation: Optional[str] = Field(
        default=None, pattern="^(admin|manager|chatter)$", alias="ROLE_SIMULATION"
    )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    return Settings()


def get_cors_origins() -> list[str]:
    settings = get_settings()
    return [origin.strip() for origin in settings.cors_allow_origins.split(",") if origin.strip()]
