"""
Abstract transport for chat-completion providers.

Defines the narrow interface the orchestrator depends on. Keeping the
provider behind ``invoke(model, messages, params, timeout)`` makes the
fallback/retry loop provider-agnostic and trivially mockable in tests.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict
import structlog


logger = structlog.get_logger(__name__)


class BaseCompletionTransport(ABC):
    """
    Abstract base class for provider transports.
    
    Responsibilities:
    - Send exactly one chat-completion request per ``invoke`` call
    - Map transport failures to LLMClientError subclasses carrying the
      HTTP status code when there is one
    - Provide health check and model listing endpoints
    
    Does NOT handle:
    - Retries or model fallback (that's the orchestrator's job)
    - Content extraction or JSON repair
    """
    
    def __init__(self, base_url: str, timeout: float = 300.0, **kwargs):
        """
        Initialize base transport.
        
        Args:
            base_url: Provider base URL (e.g., https://api.together.xyz/v1)
            timeout: Default request timeout in seconds
            **kwargs: Additional provider-specific config
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.extra_config = kwargs
        
        logger.info(
            "Initialized completion transport",
            transport_class=self.__class__.__name__,
            base_url=self.base_url,
            timeout=timeout,
        )
    
    @abstractmethod
    async def invoke(
        self,
        model: str,
        messages: list[Dict[str, Any]],
        params: Dict[str, Any],
        timeout: float,
    ) -> Dict[str, Any]:
        """
        Perform one non-streamed chat-completion call.
        
        Args:
            model: Model name to call
            messages: Wire-format chat messages (already sanitized)
            params: Sampling and variant parameters (temperature, top_p,
                tools, response_format, user, ...)
            timeout: Timeout for this call in seconds
            
        Returns:
            Decoded provider response body
            
        Raises:
            LLMTimeoutError: Call exceeded ``timeout``
            LLMConnectionError: Network failure
            LLMHTTPStatusError: Non-2xx response (status_code set)
            LLMResponseError: 2xx response whose body is not a JSON object
        """
        pass
    
    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if the provider is reachable.
        
        Returns:
            True if the provider answered, False otherwise
            
        Note:
            This should NOT raise exceptions - return False on error.
        """
        pass
    
    @abstractmethod
    async def list_models(self) -> list[str]:
        """
        List model identifiers served by the provider.
        
        Raises:
            LLMConnectionError: Unable to reach the provider
        """
        pass
    
    async def close(self):
        """
        Release connections. Default implementation does nothing.
        """
        logger.debug("Closing completion transport", transport_class=self.__class__.__name__)
    
    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"base_url={self.base_url}, "
            f"timeout={self.timeout}s)"
        )
