from sorcerify.api.cards import router as cards_router
from sorcerify.api.daily import router as daily_router
from sorcerify.api.health import router as health_router
from sorcerify.api.streak import router as streak_router

__all__ = [
    "cards_router",
    "daily_router",
    "health_router",
    "streak_router",
]
