"""
API Routers / API 路由
"""

from .cards import router as cards_router
from .daily_fortune import router as daily_fortune_router
from .diagnosis import router as diagnosis_router
from .personality import router as personality_router

__all__ = [
    "cards_router",
    "daily_fortune_router",
    "diagnosis_router",
    "personality_router",
]
