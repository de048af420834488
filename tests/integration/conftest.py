"""Integration test fixtures (HTTP stubs and service checks).

The provider is replaced by an in-process ``httpx.MockTransport`` so the
full stack (client, orchestrator, transport, httpx) runs without network.
Live-provider tests are skipped unless credentials are available.
"""

import json
import os
from typing import Any, Callable, Dict

import httpx
import pytest

from completion_layer.config import Settings
from completion_layer.llm.openai_client import OpenAICompatibleTransport


class ProviderStub:
    """Records requests and answers them with a user-supplied handler."""
    
    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.handler = handler
        self.requests: list[httpx.Request] = []
    
    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)
    
    def payloads(self) -> list[Dict[str, Any]]:
        """Decoded JSON bodies of every POST request."""
        return [json.loads(r.content) for r in self.requests if r.method == "POST"]


@pytest.fixture
def provider_stub():
    """Factory for ProviderStub instances."""
    return ProviderStub


@pytest.fixture
def make_transport(test_settings):
    """Factory building an OpenAICompatibleTransport over a ProviderStub."""
    transports: list[OpenAICompatibleTransport] = []
    
    def _create(stub: ProviderStub) -> OpenAICompatibleTransport:
        transport = OpenAICompatibleTransport(
            api_key=test_settings.LLM_API_KEY,
            base_url=test_settings.LLM_BASE_URL,
            timeout=test_settings.LLM_TIMEOUT,
            http_transport=httpx.MockTransport(stub),
        )
        transports.append(transport)
        return transport
    
    return _create


@pytest.fixture(scope="session")
def check_provider():
    """Skip unless a live provider is configured via LLM_API_KEY and AI_MODELS."""
    if not os.environ.get("LLM_API_KEY") or not os.environ.get("AI_MODELS"):
        pytest.skip("Live provider not configured (LLM_API_KEY / AI_MODELS unset)")


@pytest.fixture
def live_settings(check_provider) -> Settings:
    """Settings read from the environment for live-provider tests."""
    return Settings(_env_file=None, MAX_RETRIES=1)
