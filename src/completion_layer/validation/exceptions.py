"""
Validation-specific exceptions for JSON completions.

Both exceptions are raised for the current attempt only; the orchestrator
treats them as transient, so a fresh sample or a fallback model may still
produce a valid object.
"""

from typing import Any


class ValidationError(Exception):
    """
    Base exception for all validation errors.
    """
    
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """
        Initialize validation error.
        
        Args:
            message: Human-readable error description
            details: Structured error data for logging/metrics
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
    
    def __str__(self) -> str:
        return self.message


class InvalidJSONError(ValidationError):
    """
    Model output is not valid JSON, even after repair.
    """
    
    def __init__(self, model: str, raw_content: str | None = None, parse_error: str | None = None):
        """
        Initialize invalid JSON error.
        
        Args:
            model: Model that produced the output
            raw_content: First 500 chars of malformed content (for debugging)
            parse_error: Original json.JSONDecodeError message
        """
        details: dict[str, Any] = {"model": model}
        if raw_content:
            details["content_snippet"] = raw_content[:500]
        if parse_error:
            details["parse_error"] = parse_error
        
        super().__init__(f"Model returned invalid JSON for {model}", details)
        self.model = model


class SchemaValidationError(ValidationError):
    """
    Parsed JSON doesn't conform to the caller-supplied schema.
    """
    
    def __init__(
        self,
        message: str,
        model: str | None = None,
        validation_errors: list[str] | None = None,
    ):
        """
        Initialize schema validation error.
        
        Args:
            message: Error description
            model: Model that produced the output
            validation_errors: Individual violation messages ("path: message")
        """
        details: dict[str, Any] = {}
        if model:
            details["model"] = model
        if validation_errors:
            details["validation_errors"] = validation_errors
        
        super().__init__(message, details)
        self.model = model
        self.validation_errors = validation_errors or []
