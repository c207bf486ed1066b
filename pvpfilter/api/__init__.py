from pvpfilter.api.cards import router as cards_router
from pvpfilter.api.health import router as health_router
from pvpfilter.api.transfer import router as transfer_router
from pvpfilter.api.view import router as view_router

__all__ = [
    "cards_router",
    "health_router",
    "transfer_router",
    "view_router",
]
