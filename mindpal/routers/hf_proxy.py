"""
Hugging Face inference proxy.
"""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from mindpal.core.auth import CurrentUserId
from mindpal.core.deps import HuggingFaceDep

logger = logging.getLogger(__name__)

router = APIRouter(tags=["hf-proxy"])


class ProxyRequest(BaseModel):
    model: str = Field(..., min_length=1, description="Model id, e.g. j-hartmann/emotion-english-distilroberta-base")
    text: str


@router.post("/hf-proxy")
async def hf_proxy(
    request: ProxyRequest,
    user_id: CurrentUserId,
    hf_service: HuggingFaceDep,
) -> JSONResponse:
    """Run text through a hosted model and relay its JSON verbatim."""
    try:
        result = await hf_service.query(request.model, request.text)
        return JSONResponse(content=result)

    except Exception as e:
        logger.error(f"❌ HF proxy failed for {request.model}: {e}")
        return JSONResponse(status_code=500, content={"error": "Proxy failed"})
