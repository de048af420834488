"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

from typing import Any, Dict, Optional

import pytest

from completion_layer.config import Settings
from completion_layer.models.llm_models import ChatMessage, CompletionRequest


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing.
    
    Backoff delays are zero so retry tests never sleep.
    """
    return Settings(
        _env_file=None,
        # === Application ===
        APP_NAME="Completion Layer (Test)",
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
        
        # === Provider ===
        LLM_API_KEY="test-api-key",
        LLM_BASE_URL="https://llm.test/v1",
        AI_MODELS="model1,model2,model3",
        LLM_TIMEOUT=30.0,
        
        # === Retry & Fallback ===
        MAX_RETRIES=3,
        RETRY_INITIAL_DELAY=0.0,
        RETRY_BACKOFF_BASE=2.0,
        RETRY_MAX_DELAY=0.0,
    )


@pytest.fixture
def make_completion():
    """Factory fixture for raw provider responses.
    
    Usage:
        def test_something(make_completion):
            completion = make_completion("Hello", total_tokens=5)
    """
    def _create(
        content: Any = "Success",
        tool_calls: Optional[list[Dict[str, Any]]] = None,
        total_tokens: Optional[int] = 10,
    ) -> Dict[str, Any]:
        message: Dict[str, Any] = {"role": "assistant", "content": content}
        if tool_calls is not None:
            message["tool_calls"] = tool_calls
        completion: Dict[str, Any] = {
            "id": "cmpl-test",
            "object": "chat.completion",
            "choices": [{"index": 0, "message": message, "finish_reason": "stop"}],
        }
        if total_tokens is not None:
            completion["usage"] = {
                "prompt_tokens": total_tokens // 2,
                "completion_tokens": total_tokens - total_tokens // 2,
                "total_tokens": total_tokens,
            }
        return completion
    
    return _create


@pytest.fixture
def make_request():
    """Factory fixture for CompletionRequest with a single user message."""
    def _create(content: str = "Test", **kwargs: Any) -> CompletionRequest:
        return CompletionRequest(
            messages=[ChatMessage(role="user", content=content)],
            **kwargs,
        )
    
    return _create
