"""
Hugging Face Inference API proxy.

The browser can't hold the API key, so it posts ``{model, text}`` here and
gets back whatever the hosted model returns.
"""

from typing import Any

import httpx

from mindpal.core.config import settings


class HuggingFaceService:
    """Forward text to a hosted Hugging Face model."""

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.api_key = settings.hf_api_key
        self.base_url = settings.hf_api_url.rstrip("/")
        self.transport = transport

    async def query(self, model: str, text: str) -> Any:
        """
        Run ``text`` through ``model``.

        The decoded JSON body is returned unmodified, including error
        payloads such as ``{"error": "Model is loading"}``.

        Raises:
            httpx.HTTPError: If the request can't be made
            ValueError: If the response isn't JSON
        """
        async with httpx.AsyncClient(transport=self.transport, timeout=60.0) as client:
            response = await client.post(
                f"{self.base_url}/{model}",
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                json={"inputs": text, "options": {"wait_for_model": True}},
            )

        return response.json()
