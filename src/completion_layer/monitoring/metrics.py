"""Custom Prometheus metrics for the completion layer.

These metrics are registered on the default registry and exposed by whatever
service embeds the client. Alert rules should be configured for:
- completions_exhausted_total (every model in the chain failed)
- llm_fallbacks_total (primary models are unhealthy)
- validation_failures_total (models returning malformed JSON)
"""

from prometheus_client import Counter, Histogram

# === Orchestration Metrics ===

llm_attempts_total = Counter(
    "llm_attempts_total",
    "Total provider calls by model and outcome",
    ["model", "outcome"],
)
"""
Provider calls counter.

Labels:
- model: Model name
- outcome: success, transient_failure, permanent_failure
"""

llm_retries_total = Counter(
    "llm_retries_total",
    "Retries of the same model after a transient failure",
    ["model"],
)

llm_fallbacks_total = Counter(
    "llm_fallbacks_total",
    "Moves from one model to the next in the fallback chain",
    ["from_model", "to_model"],
)
"""
Fallback counter.

Alert thresholds:
- WARN: fallback rate > 10% of completions
- CRITICAL: fallback rate > 30% of completions
"""

completions_exhausted_total = Counter(
    "completions_exhausted_total",
    "Completions that failed on every model of the chain",
    ["operation"],
)

# === Validation Metrics ===

validation_failures_total = Counter(
    "validation_failures_total",
    "JSON completion validation failures by stage and error type",
    ["stage", "error_type"],
)
"""
Labels:
- stage: json_parse, schema
- error_type: empty_content, json_decode_error, schema_violation
"""

# === LLM Performance Metrics ===

llm_latency_seconds = Histogram(
    "llm_latency_seconds",
    "Provider call latency in seconds",
    ["model", "success"],
    buckets=[0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0, 120.0, 300.0],
)
"""
Provider latency histogram.

Labels:
- model: Model name
- success: true (call returned a payload), false (call raised)

Buckets span the default 300s per-call timeout.
"""

llm_tokens_total = Counter(
    "llm_tokens_total",
    "Total tokens reported by the provider",
    ["model"],
)
