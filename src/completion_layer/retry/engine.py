"""
Fallback/retry orchestrator.

Runs one operation against an ordered list of models:

    model[0] attempt 1, model[0] attempt 2, ..., model[1] attempt 1, ...

- The first success ends the run; later models are never called.
- A permanent (4xx) failure ends the run immediately and is re-raised as is,
  skipping remaining retries *and* remaining models.
- Transient failures are retried on the same model while the model's share
  of the retry budget lasts, then the next model is tried.
- If the last model runs out, AllModelsFailedError wraps the last failure.

The retry budget is shared by the whole chain, NOT reset per model: retries
spent on model[0] are no longer available to model[1]. On entering model i
of n with r retries left, the model may spend ceil(r / (n - i)) of them, so
the last model gets everything that is left. Worst case is n + R calls.

Usage:
    orchestrator = FallbackRetryOrchestrator(ExponentialBackoff.from_settings(settings))
    outcome = await orchestrator.run(["m1", "m2"], call_model, retries=2)
"""

import asyncio
import math
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Optional, Sequence, TypeVar

import structlog

from completion_layer.llm.exceptions import ConfigurationError
from completion_layer.models.enums import AttemptOutcome, ErrorKind
from completion_layer.models.llm_models import ModelAttempt
from completion_layer.monitoring.metrics import (
    completions_exhausted_total,
    llm_attempts_total,
    llm_fallbacks_total,
    llm_retries_total,
)
from completion_layer.retry.classifier import classify_error, get_status_code
from completion_layer.retry.exceptions import AllModelsFailedError
from completion_layer.retry.metadata import RetryMetadata
from completion_layer.retry.strategies import ExponentialBackoff

logger = structlog.get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class AttemptResult(Generic[T]):
    """
    Tagged result of a single call.
    
    Exactly one of ``value`` (on success) or ``error`` (on failure) is set.
    """
    
    outcome: AttemptOutcome
    value: Optional[T] = None
    error: Optional[Exception] = None


@dataclass(frozen=True)
class OrchestrationResult(Generic[T]):
    """Successful run: the winning model, its value and the attempt history."""
    
    model: str
    value: T
    retry_metadata: RetryMetadata


class FallbackRetryOrchestrator:
    """
    Sequential first-success-wins loop over a model list.
    
    One instance may serve many runs; all per-run state (remaining budget,
    attempt records) lives in local variables of ``run``.
    
    Attributes:
        backoff: Delay policy between retries of the same model
        sleep: Awaitable used to wait (asyncio.sleep; replaceable in tests)
    """
    
    def __init__(
        self,
        backoff: Optional[ExponentialBackoff] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.backoff = backoff or ExponentialBackoff()
        self.sleep = sleep
    
    async def attempt(self, model: str, invoke: Callable[[str], Awaitable[T]]) -> AttemptResult[T]:
        """Call ``invoke(model)`` once and tag the outcome."""
        try:
            value = await invoke(model)
        except Exception as e:
            if classify_error(e) is ErrorKind.PERMANENT:
                return AttemptResult(outcome=AttemptOutcome.PERMANENT_FAILURE, error=e)
            return AttemptResult(outcome=AttemptOutcome.TRANSIENT_FAILURE, error=e)
        return AttemptResult(outcome=AttemptOutcome.SUCCESS, value=value)
    
    async def run(
        self,
        models: Sequence[str],
        invoke: Callable[[str], Awaitable[T]],
        retries: int,
        operation: str = "completion",
    ) -> OrchestrationResult[T]:
        """
        Run ``invoke`` over ``models`` until one succeeds.
        
        Args:
            models: Effective model list (non-empty, already deduplicated)
            invoke: Coroutine function performing one call for one model
            retries: Retry budget shared across the whole chain
            operation: Label for logs and errors
        
        Returns:
            OrchestrationResult of the first successful call
        
        Raises:
            ConfigurationError: If ``models`` is empty
            Exception: The original error of a permanent (4xx) failure
            AllModelsFailedError: Transient failures exhausted every model
        """
        if not models:
            raise ConfigurationError(f"No models available for {operation}")
        if retries < 0:
            raise ValueError("retries must be >= 0")
        
        start_time = time.perf_counter()
        remaining_retries = retries
        retries_used = 0
        attempts: list[ModelAttempt] = []
        models_tried: list[str] = []
        last_error: Optional[Exception] = None
        
        def build_metadata(final_model: str) -> RetryMetadata:
            return RetryMetadata(
                total_attempts=len(attempts),
                models_tried=list(models_tried),
                final_model=final_model,
                total_latency_ms=int((time.perf_counter() - start_time) * 1000),
                attempts=list(attempts),
            )
        
        for index, model in enumerate(models):
            # Shared budget, never reset per model: spending here starves later models
            model_share = math.ceil(remaining_retries / (len(models) - index))
            models_tried.append(model)
            attempt_number = 0
            
            while True:
                attempt_number += 1
                attempt_start = time.perf_counter()
                result = await self.attempt(model, invoke)
                latency_ms = int((time.perf_counter() - attempt_start) * 1000)
                
                attempts.append(
                    ModelAttempt(
                        model=model,
                        attempt=attempt_number,
                        outcome=result.outcome,
                        latency_ms=latency_ms,
                        error=f"{type(result.error).__name__}: {result.error}" if result.error else None,
                    )
                )
                llm_attempts_total.labels(model=model, outcome=result.outcome.value).inc()
                
                if result.outcome is AttemptOutcome.SUCCESS:
                    metadata = build_metadata(model)
                    logger.info(
                        f"{operation} succeeded",
                        operation=operation,
                        model=model,
                        attempt=attempt_number,
                        total_attempts=metadata.total_attempts,
                        latency_ms=latency_ms,
                        total_latency_ms=metadata.total_latency_ms,
                    )
                    return OrchestrationResult(model=model, value=result.value, retry_metadata=metadata)
                
                last_error = result.error
                
                if result.outcome is AttemptOutcome.PERMANENT_FAILURE:
                    logger.error(
                        f"Permanent client error for {operation} with model {model}, not retrying",
                        operation=operation,
                        model=model,
                        attempt=attempt_number,
                        total_attempts=len(attempts),
                        status=get_status_code(result.error),
                        error_type=type(result.error).__name__,
                        error=str(result.error),
                    )
                    raise result.error
                
                logger.warning(
                    f"Model {model} failed for {operation}",
                    operation=operation,
                    model=model,
                    attempt=attempt_number,
                    total_attempts=len(attempts),
                    outcome=result.outcome.value,
                    latency_ms=latency_ms,
                    error_type=type(result.error).__name__,
                    error=str(result.error),
                )
                
                if attempt_number <= model_share:
                    remaining_retries -= 1
                    retries_used += 1
                    delay = self.backoff.delay(retries_used)
                    llm_retries_total.labels(model=model).inc()
                    logger.info(
                        f"Retrying {model} (attempt {attempt_number + 1})",
                        operation=operation,
                        model=model,
                        next_attempt=attempt_number + 1,
                        delay_seconds=delay,
                        remaining_retries=remaining_retries,
                    )
                    await self.sleep(delay)
                    continue
                
                break
            
            if index < len(models) - 1:
                next_model = models[index + 1]
                llm_fallbacks_total.labels(from_model=model, to_model=next_model).inc()
                logger.warning(
                    f"Falling back from {model} to {next_model}",
                    operation=operation,
                    from_model=model,
                    to_model=next_model,
                    remaining_retries=remaining_retries,
                )
        
        metadata = build_metadata(models_tried[-1])
        completions_exhausted_total.labels(operation=operation).inc()
        logger.error(
            f"All models failed for {operation}",
            operation=operation,
            total_attempts=metadata.total_attempts,
            models_tried=metadata.models_tried,
            total_latency_ms=metadata.total_latency_ms,
            final_error_type=type(last_error).__name__,
        )
        raise AllModelsFailedError(operation, last_error, metadata) from last_error
