"""
Fallback and retry machinery.

Main Components:
    - FallbackRetryOrchestrator: first-success-wins loop over a model list
    - ModelList: resolves the effective model list for a call
    - classify_error: permanent (4xx) vs transient failure
    - ExponentialBackoff: delay between retries of the same model
    - RetryMetadata: attempt history of one run
    - AllModelsFailedError: raised when every model is exhausted

Usage:
    >>> from completion_layer.retry import FallbackRetryOrchestrator
    >>> orchestrator = FallbackRetryOrchestrator()
    >>> outcome = await orchestrator.run(["m1", "m2"], call_model, retries=3)
"""

from completion_layer.retry.classifier import classify_error, get_status_code, is_permanent_error
from completion_layer.retry.engine import AttemptResult, FallbackRetryOrchestrator, OrchestrationResult
from completion_layer.retry.exceptions import AllModelsFailedError
from completion_layer.retry.metadata import RetryMetadata
from completion_layer.retry.model_list import ModelList, parse_model_list
from completion_layer.retry.strategies import ExponentialBackoff

__all__ = [
    "FallbackRetryOrchestrator",
    "AttemptResult",
    "OrchestrationResult",
    "ModelList",
    "parse_model_list",
    "classify_error",
    "get_status_code",
    "is_permanent_error",
    "ExponentialBackoff",
    "RetryMetadata",
    "AllModelsFailedError",
]
