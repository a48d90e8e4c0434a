"""
MindPal Backend API

Journaling with AI mood analysis, a virtual pet companion fed by the coins
journaling earns, and a directory for connecting with therapists.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mindpal.core.config import settings
from mindpal.routers import (
    health_router,
    auth_router,
    profile_router,
    pets_router,
    journal_router,
    analytics_router,
    quests_router,
    therapists_router,
    chats_router,
    hf_proxy_router,
)

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info(f"🐾 Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"📍 API prefix: {settings.api_v1_prefix}")
    logger.info(f"🔧 Debug mode: {settings.debug}")

    yield

    logger.info("👋 Shutting down MindPal API")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Mental wellness journaling with mood analysis and a pet companion",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root() -> dict[str, str]:
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "api": settings.api_v1_prefix,
        "docs": app.docs_url,
    }


API_ROUTERS = (
    auth_router,
    profile_router,
    pets_router,
    journal_router,
    analytics_router,
    quests_router,
    therapists_router,
    chats_router,
    hf_proxy_router,
)

# /health is unversioned
app.include_router(health_router)
for api_router in API_ROUTERS:
    app.include_router(api_router, prefix=settings.api_v1_prefix)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "mindpal.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info",
    )
