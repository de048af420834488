"""
Provider access for the completion layer.

Components:
- BaseCompletionTransport: Abstract provider transport
- OpenAICompatibleTransport: httpx implementation for /chat/completions
- CompletionInvoker: One sanitized call for one model
- extraction: Raw response -> text, tool calls, token count
- text_utils: Outgoing message sanitization
- exceptions: LLM-specific exceptions
"""

from completion_layer.llm.base_client import BaseCompletionTransport
from completion_layer.llm.openai_client import OpenAICompatibleTransport
from completion_layer.llm.invoker import CompletionInvoker, build_params
from completion_layer.llm.extraction import extract_completion_content
from completion_layer.llm.text_utils import sanitize_messages, sanitize_text
from completion_layer.llm.exceptions import (
    LLMClientError,
    ConfigurationError,
    LLMConnectionError,
    LLMTimeoutError,
    LLMHTTPStatusError,
    LLMResponseError,
)

__all__ = [
    "BaseCompletionTransport",
    "OpenAICompatibleTransport",
    "CompletionInvoker",
    "build_params",
    "extract_completion_content",
    "sanitize_messages",
    "sanitize_text",
    "LLMClientError",
    "ConfigurationError",
    "LLMConnectionError",
    "LLMTimeoutError",
    "LLMHTTPStatusError",
    "LLMResponseError",
]
