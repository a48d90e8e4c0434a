"""
Tests for the Hugging Face inference proxy.
"""

import json

import httpx
import pytest

from mindpal.core.config import settings
from mindpal.services.huggingface_service import HuggingFaceService

PROXY_URL = f"{settings.api_v1_prefix}/hf-proxy"
MODEL = "j-hartmann/emotion-english-distilroberta-base"


class TestHuggingFaceService:
    async def test_posts_inputs_to_model_url(self, hf_handler, hf_requests):
        service = HuggingFaceService(transport=httpx.MockTransport(hf_handler))

        result = await service.query(MODEL, "What a lovely day")

        [request] = hf_requests
        assert str(request.url) == f"{settings.hf_api_url}/{MODEL}"
        assert request.headers["Authorization"].startswith("Bearer ")
        assert json.loads(request.content) == {
            "inputs": "What a lovely day",
            "options": {"wait_for_model": True},
        }
        assert result == [[{"label": "joy", "score": 0.91}]]

    async def test_error_payload_is_returned_as_is(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, json={"error": "Model is loading", "estimated_time": 20})

        service = HuggingFaceService(transport=httpx.MockTransport(handler))

        assert await service.query(MODEL, "hi") == {"error": "Model is loading", "estimated_time": 20}


class TestProxyEndpoint:
    def test_relays_model_output(self, client, headers):
        response = client.post(PROXY_URL, json={"model": MODEL, "text": "Great news"}, headers=headers)

        assert response.status_code == 200
        assert response.json() == [[{"label": "joy", "score": 0.91}]]

    def test_requires_auth(self, client):
        response = client.post(PROXY_URL, json={"model": MODEL, "text": "Great news"})

        assert response.status_code in (401, 403)


class TestProxyFailure:
    @pytest.fixture
    def hf_handler(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        return handler

    def test_upstream_failure(self, client, headers):
        response = client.post(PROXY_URL, json={"model": MODEL, "text": "Great news"}, headers=headers)

        assert response.status_code == 500
        assert response.json() == {"error": "Proxy failed"}
