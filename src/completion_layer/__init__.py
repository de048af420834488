"""
Resilient completion layer for OpenAI-compatible LLM APIs.

Turns one logical completion into a sequence of provider calls:
- Ordered fallback across candidate models
- Retries of transient failures under a budget shared by the whole chain
- Immediate bail-out on permanent (4xx) request errors
- Three output shapes: free text, schema-validated JSON, tool calls

Architecture: CompletionClient -> FallbackRetryOrchestrator -> CompletionInvoker -> httpx transport
"""

__version__ = "0.1.0"

from completion_layer.client import CompletionClient
from completion_layer.logging_config import configure_logging
from completion_layer.models.llm_models import (
    ChatMessage,
    CompletionRequest,
    CompletionResult,
    JsonCompletionResult,
    ToolCall,
)
from completion_layer.retry.exceptions import AllModelsFailedError

__all__ = [
    "CompletionClient",
    "ChatMessage",
    "CompletionRequest",
    "CompletionResult",
    "JsonCompletionResult",
    "ToolCall",
    "AllModelsFailedError",
    "configure_logging",
]
