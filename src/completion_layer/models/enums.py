"""
Enumerations for completion layer data models.
"""

from enum import Enum


class AttemptOutcome(str, Enum):
    """
    Outcome of a single provider call made by the orchestrator.

    The orchestrator branches on this tag instead of catching a bail
    sentinel, so every transition of the fallback/retry loop is explicit.
    """

    SUCCESS = "success"
    TRANSIENT_FAILURE = "transient_failure"
    PERMANENT_FAILURE = "permanent_failure"


class ErrorKind(str, Enum):
    """Classification of a failure for retry purposes."""

    PERMANENT = "permanent"
    TRANSIENT = "transient"


class CompletionKind(str, Enum):
    """Output shape requested from the provider."""

    CHAT = "chat completion"
    JSON = "json completion"
    TOOL = "tool completion"
