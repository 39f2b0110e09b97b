from __future__ import annotations

from fastapi import APIRouter

from src.api.achievements import router as achievements_router
from src.api.chatters import router as chatters_router
from src.api.health import router as health_router
from src.api.leaderboard import router as leaderboard_router
from src.api.trends import router as trends_router


api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(leaderboard_router)
api_router.include_router(chatters_router)
api_router.include_router(trends_router)
api_router.include_router(achievements_router)
