"""
Single-call invoker sitting between the orchestrator and the transport.

Builds the provider parameters for one model, sanitizes outgoing text,
performs exactly one call and records latency/token metrics. Every failure
is re-raised unchanged; classification happens in the orchestrator.
"""

import time
from typing import Any, Dict, Optional

import structlog

from completion_layer.llm.base_client import BaseCompletionTransport
from completion_layer.llm.text_utils import sanitize_messages
from completion_layer.models.llm_models import ChatMessage
from completion_layer.monitoring.metrics import llm_latency_seconds, llm_tokens_total


logger = structlog.get_logger(__name__)


def build_params(
    temperature: float,
    top_p: float,
    max_tokens: Optional[int] = None,
    user_id: Optional[str] = None,
    **extra: Any,
) -> Dict[str, Any]:
    """
    Assemble request parameters in OpenAI wire names.
    
    ``max_tokens`` and ``user`` are only sent when set; ``extra`` entries
    whose value is None are dropped.
    """
    params: Dict[str, Any] = {"temperature": temperature, "top_p": top_p}
    if max_tokens:
        params["max_tokens"] = max_tokens
    if user_id:
        # Lets the provider cache usage per end user; has no semantic effect
        params["user"] = user_id
    params.update({key: value for key, value in extra.items() if value is not None})
    return params


class CompletionInvoker:
    """
    Performs one chat-completion call for one model.
    
    Attributes:
        transport: Provider transport the call is delegated to
    """
    
    def __init__(self, transport: BaseCompletionTransport):
        self.transport = transport
    
    async def invoke(
        self,
        model: str,
        messages: list[ChatMessage],
        params: Dict[str, Any],
        timeout: float,
    ) -> Dict[str, Any]:
        """
        Call ``model`` once.
        
        Args:
            model: Model name
            messages: Caller messages (sanitized here, never mutated)
            params: Output of ``build_params``
            timeout: Per-call timeout in seconds
            
        Returns:
            Raw provider response
            
        Raises:
            Whatever the transport raises, unchanged
        """
        wire_messages = sanitize_messages(messages)
        start_time = time.perf_counter()
        
        try:
            completion = await self.transport.invoke(model, wire_messages, params, timeout)
        except Exception:
            llm_latency_seconds.labels(model=model, success="false").observe(time.perf_counter() - start_time)
            raise
        
        llm_latency_seconds.labels(model=model, success="true").observe(time.perf_counter() - start_time)
        
        usage = completion.get("usage") or {}
        total_tokens = usage.get("total_tokens")
        if isinstance(total_tokens, int) and total_tokens > 0:
            llm_tokens_total.labels(model=model).inc(total_tokens)
        
        return completion
