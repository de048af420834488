"""
Custom exceptions for the LLM client layer.

These exceptions provide structured error handling for provider calls,
allowing the orchestrator to distinguish permanent request errors (4xx)
from transient ones (network, timeout, 5xx) through ``status_code``.
"""

from typing import Optional


class LLMClientError(Exception):
    """
    Base exception for all LLM client errors.
    
    All LLM-specific exceptions inherit from this to allow catching
    any LLM-related error with a single except clause.
    """
    def __init__(
        self,
        message: str,
        details: dict | None = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.status_code = status_code


class ConfigurationError(LLMClientError):
    """
    Raised when the client or a call is misconfigured.

    Examples:
    - LLM_API_KEY not set
    - AI_MODELS empty and no explicit models given
    - Tool completion called with an empty tool list

    Never retried; raised before any network call is made.
    """
    pass


class LLMConnectionError(LLMClientError):
    """
    Raised when unable to reach the provider.
    
    Includes network errors, DNS failures, dropped connections.
    Carries no status code, so it is always transient.
    """
    pass


class LLMTimeoutError(LLMConnectionError):
    """
    Raised when a single provider call exceeds its timeout.
    
    Transient: retried and eligible for fallback like any network error.
    """
    pass


class LLMHTTPStatusError(LLMClientError):
    """
    Raised when the provider answers with a non-2xx status.

    4xx responses are permanent (bad key, invalid arguments, context too
    long); 5xx responses are transient.
    """
    pass


class LLMResponseError(LLMClientError):
    """
    Raised when the provider answers 2xx with a body that is not a JSON object.
    """
    pass
