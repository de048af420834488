"""
OpenAI-compatible transport (Together AI, OpenAI, vLLM, llama.cpp, ...).

Communicates with the provider's ``/chat/completions`` endpoint using an
httpx AsyncClient. Supports:
- Bearer-token auth and base URL override
- Per-call timeouts
- Connection pooling via a persistent client
- Health checks and model listing via ``/models``

Exactly one HTTP request is made per ``invoke``; retries live in the
orchestrator.
"""

import time
from typing import Any, Dict, Optional
import httpx
import structlog

from completion_layer.llm.base_client import BaseCompletionTransport
from completion_layer.llm.exceptions import (
    LLMConnectionError,
    LLMHTTPStatusError,
    LLMResponseError,
    LLMTimeoutError,
)


logger = structlog.get_logger(__name__)


class OpenAICompatibleTransport(BaseCompletionTransport):
    """
    httpx transport for OpenAI-compatible chat-completion APIs.
    
    API Endpoints:
    - POST /chat/completions: Non-streamed completion
    - GET /models: List available models
    """
    
    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.together.xyz/v1",
        timeout: float = 300.0,
        connection_limits: Optional[httpx.Limits] = None,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
        **kwargs
    ):
        """
        Initialize the transport.
        
        Args:
            api_key: Provider API key, sent as a bearer token
            base_url: Provider base URL
            timeout: Default timeout in seconds (overridden per call)
            connection_limits: httpx connection pool limits (default: 10 max connections)
            http_transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
            **kwargs: Additional config
        """
        super().__init__(base_url, timeout, **kwargs)
        
        if connection_limits is None:
            connection_limits = httpx.Limits(
                max_keepalive_connections=5,
                max_connections=10,
                keepalive_expiry=30.0
            )
        
        self._api_key = api_key
        self._client: Optional[httpx.AsyncClient] = None
        self._connection_limits = connection_limits
        self._http_transport = http_transport
    
    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                limits=self._connection_limits,
                headers={"Authorization": f"Bearer {self._api_key}"},
                transport=self._http_transport,
                follow_redirects=True
            )
            logger.debug("Created new httpx AsyncClient")
        return self._client
    
    async def invoke(
        self,
        model: str,
        messages: list[Dict[str, Any]],
        params: Dict[str, Any],
        timeout: float,
    ) -> Dict[str, Any]:
        """
        POST /chat/completions with payload:
        {
            "model": "meta-llama/Llama-3.3-70B-Instruct-Turbo",
            "messages": [...],
            "temperature": 0.7,
            "top_p": 1.0,
            "max_tokens": 512,          # optional
            "user": "user-123",         # optional
            "tools": [...],             # tool completions
            "tool_choice": "auto",      # optional
            "response_format": {"type": "json_object"},  # JSON completions
            "stream": false
        }
        """
        payload = {"model": model, "messages": messages, **params, "stream": False}
        start_time = time.perf_counter()
        
        logger.debug(
            "Sending chat completion request",
            model=model,
            base_url=self.base_url,
            message_count=len(messages),
            has_user_id="user" in params,
        )
        
        try:
            client = await self._get_client()
            response = await client.post(
                "/chat/completions",
                json=payload,
                timeout=httpx.Timeout(timeout),
            )
            response.raise_for_status()
            
        except httpx.TimeoutException as e:
            logger.error(
                "Chat completion request timed out",
                model=model,
                base_url=self.base_url,
                timeout=timeout,
                error=str(e),
            )
            raise LLMTimeoutError(
                f"Request timeout after {timeout}s",
                details={"model": model, "timeout": timeout}
            ) from e
            
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.error(
                "Chat completion request failed",
                model=model,
                base_url=self.base_url,
                status=status_code,
                error=e.response.text[:500],
            )
            raise LLMHTTPStatusError(
                f"Provider returned HTTP {status_code} for {model}",
                details={"model": model, "status": status_code, "error": e.response.text[:500]},
                status_code=status_code,
            ) from e
            
        except httpx.TransportError as e:
            logger.error(
                "Chat completion network error",
                model=model,
                base_url=self.base_url,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise LLMConnectionError(
                f"Network error: {str(e)}",
                details={"model": model, "error_type": type(e).__name__}
            ) from e
        
        try:
            data = response.json()
        except ValueError as e:
            raise LLMResponseError(
                f"Provider returned a non-JSON body for {model}",
                details={"model": model, "body": response.text[:500]}
            ) from e
        
        if not isinstance(data, dict):
            raise LLMResponseError(
                f"Provider returned {type(data).__name__} instead of an object for {model}",
                details={"model": model}
            )
        
        logger.debug(
            "Chat completion response received",
            model=model,
            latency_ms=int((time.perf_counter() - start_time) * 1000),
        )
        return data
    
    async def health_check(self) -> bool:
        """
        Check provider health via GET /models.
        
        Returns True if the provider responds, False otherwise.
        """
        try:
            client = await self._get_client()
            response = await client.get("/models", timeout=5.0)
            response.raise_for_status()
            logger.debug("Provider health check passed")
            return True
        except httpx.HTTPError as e:
            logger.warning("Provider health check failed", error=str(e))
            return False
    
    async def list_models(self) -> list[str]:
        """
        List available models via GET /models.
        
        OpenAI answers ``{"data": [{"id": ...}]}``; Together AI answers a bare
        list of model objects. Both shapes are accepted.
        """
        try:
            client = await self._get_client()
            response = await client.get("/models", timeout=10.0)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Failed to list models", error=str(e))
            raise LLMConnectionError(
                f"Failed to list models: {str(e)}",
                details={"error": str(e)}
            ) from e
        
        entries = data.get("data", []) if isinstance(data, dict) else data
        models = [entry["id"] for entry in entries if isinstance(entry, dict) and "id" in entry]
        logger.debug("Listed available models", count=len(models))
        return models
    
    async def close(self):
        """Close the HTTP client connection."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed provider HTTP client")
    
    async def __aenter__(self):
        """Async context manager entry."""
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
