"""
Request/response models for the completion layer.

These models are the boundary between callers (other backend services) and
the orchestrator. Requests are frozen and built fresh per call; results are
handed to the caller and never touched again by the client.
"""

from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from completion_layer.models.enums import AttemptOutcome


MessageContent = Union[str, list[Dict[str, Any]], None]


class ChatMessage(BaseModel):
    """
    One chat message in OpenAI wire format.

    Content is either plain text or a list of typed parts
    (``{"type": "text", "text": "..."}``, image parts, ...). Extra keys such
    as ``tool_call_id`` or ``tool_calls`` are passed through untouched.
    """
    model_config = ConfigDict(frozen=True, extra="allow")

    role: str = Field(..., description="system, user, assistant or tool")
    content: MessageContent = Field(default=None, description="Text or list of typed content parts")
    name: Optional[str] = Field(default=None, description="Optional participant name")


class CompletionRequest(BaseModel):
    """
    Immutable description of one completion call.

    Sampling parameters left as ``None`` take the defaults of the completion
    variant (chat, JSON or tool); an explicit value always wins, including 0.
    """
    model_config = ConfigDict(frozen=True)

    messages: list[ChatMessage] = Field(..., min_length=1, description="Ordered chat messages")
    model: Optional[str] = Field(default=None, description="Primary model, tried first")
    fallback_models: list[str] = Field(default_factory=list, description="Models tried after the primary, in order")
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0, description="Sampling temperature")
    top_p: Optional[float] = Field(default=None, ge=0.0, le=1.0, description="Nucleus sampling parameter")
    max_tokens: Optional[int] = Field(default=None, ge=1, description="Maximum tokens to generate")
    timeout: Optional[float] = Field(default=None, gt=0, description="Per-call timeout in seconds")
    user_id: Optional[str] = Field(
        default=None,
        description="Provider-side cache partition hint (not an auth identity)"
    )
    retries: Optional[int] = Field(
        default=None,
        ge=0,
        description="Retry budget shared across the whole fallback chain"
    )


class ToolCallFunction(BaseModel):
    """Function name and raw JSON argument string, exactly as the provider sent them."""
    model_config = ConfigDict(frozen=True)

    name: str = ""
    arguments: str = ""


class ToolCall(BaseModel):
    """A structured function invocation returned by the provider."""
    model_config = ConfigDict(frozen=True)

    id: str
    type: str = "function"
    function: ToolCallFunction


class ExtractedContent(BaseModel):
    """Normalized view of a raw provider response."""
    model_config = ConfigDict(frozen=True)

    text: str = ""
    tool_calls: Optional[list[ToolCall]] = None
    token_count: int = 0


class ModelAttempt(BaseModel):
    """
    Record of one network call made during an orchestration run.

    Not persisted; only used for logging and returned on the result for
    callers that want to inspect the path taken.
    """
    model_config = ConfigDict(frozen=True)

    model: str
    attempt: int = Field(..., ge=1, description="Attempt ordinal for this model (1 = first try)")
    outcome: AttemptOutcome
    latency_ms: int = Field(..., ge=0)
    error: Optional[str] = Field(default=None, description="Error type and message, if the attempt failed")


class CompletionResult(BaseModel):
    """Result of a chat or tool completion."""
    model_config = ConfigDict(frozen=True)

    content: str = Field(..., description="Extracted text, trimmed")
    tokens: int = Field(default=0, ge=0, description="Total tokens reported by the provider, 0 if absent")
    model: str = Field(..., description="Model that produced the successful response")
    tool_calls: Optional[list[ToolCall]] = None
    attempts: list[ModelAttempt] = Field(default_factory=list, description="Every call made for this result")


class JsonCompletionResult(CompletionResult):
    """Result of a JSON completion; ``object`` holds the validated value."""

    object: Any = None


ToolChoice = Union[Literal["none", "auto", "required"], Dict[str, Any]]
