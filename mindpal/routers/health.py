"""
Health check endpoint.
"""

from datetime import datetime, timezone

from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "mindpal-api",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
