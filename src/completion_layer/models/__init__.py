"""
Pydantic data models for the completion layer.

Includes:
- Enums (AttemptOutcome, ErrorKind, CompletionKind)
- Request models (ChatMessage, CompletionRequest)
- Response models (ToolCall, ExtractedContent, CompletionResult, JsonCompletionResult)
- ModelAttempt (per-call record for observability)
"""

from completion_layer.models.enums import AttemptOutcome, CompletionKind, ErrorKind
from completion_layer.models.llm_models import (
    ChatMessage,
    CompletionRequest,
    CompletionResult,
    ExtractedContent,
    JsonCompletionResult,
    MessageContent,
    ModelAttempt,
    ToolCall,
    ToolCallFunction,
    ToolChoice,
)

__all__ = [
    # Enums
    "AttemptOutcome",
    "CompletionKind",
    "ErrorKind",
    # Request models
    "ChatMessage",
    "CompletionRequest",
    "MessageContent",
    "ToolChoice",
    # Response models
    "ToolCall",
    "ToolCallFunction",
    "ExtractedContent",
    "CompletionResult",
    "JsonCompletionResult",
    "ModelAttempt",
]
