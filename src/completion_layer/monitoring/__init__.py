"""Monitoring and metrics instrumentation for the completion layer.

Exports custom Prometheus metrics for operational monitoring and alerting.
"""

from completion_layer.monitoring.metrics import (
    completions_exhausted_total,
    llm_attempts_total,
    llm_fallbacks_total,
    llm_latency_seconds,
    llm_retries_total,
    llm_tokens_total,
    validation_failures_total,
)

__all__ = [
    "llm_attempts_total",
    "llm_retries_total",
    "llm_fallbacks_total",
    "completions_exhausted_total",
    "validation_failures_total",
    "llm_latency_seconds",
    "llm_tokens_total",
]
