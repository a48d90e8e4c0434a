"""API routers."""

from .health import router as health_router
from .auth import router as auth_router
from .profile import router as profile_router
from .pets import router as pets_router
from .journal import router as journal_router
from .analytics import router as analytics_router
from .quests import router as quests_router
from .therapists import router as therapists_router
from .chats import router as chats_router
from .hf_proxy import router as hf_proxy_router

__all__ = [
    "health_router",
    "auth_router",
    "profile_router",
    "pets_router",
    "journal_router",
    "analytics_router",
    "quests_router",
    "therapists_router",
    "chats_router",
    "hf_proxy_router",
]
