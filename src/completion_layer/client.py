"""
Resilient completion client.

Entry point for other backend services. Each operation resolves the
effective model list, then hands a single-model call to the
FallbackRetryOrchestrator:

- chat_completion: free text (and any tool calls the model volunteers)
- json_completion: JSON-mode output, repaired and validated against a schema
- tool_completion: function/tool calling

Usage:
    async with CompletionClient() as client:
        result = await client.chat_completion(
            CompletionRequest(messages=[ChatMessage(role="user", content="Hi")])
        )
"""

from typing import Any, Callable, Dict, Optional, Sequence, TypeVar

import structlog

from completion_layer.config import Settings, settings as default_settings
from completion_layer.llm.base_client import BaseCompletionTransport
from completion_layer.llm.exceptions import ConfigurationError
from completion_layer.llm.extraction import extract_completion_content
from completion_layer.llm.invoker import CompletionInvoker, build_params
from completion_layer.llm.openai_client import OpenAICompatibleTransport
from completion_layer.models.enums import CompletionKind
from completion_layer.models.llm_models import (
    CompletionRequest,
    CompletionResult,
    ExtractedContent,
    JsonCompletionResult,
    ToolChoice,
)
from completion_layer.retry.engine import FallbackRetryOrchestrator, OrchestrationResult
from completion_layer.retry.model_list import ModelList
from completion_layer.retry.strategies import ExponentialBackoff
from completion_layer.validation.pipeline import JsonRepairValidator
from completion_layer.validation.schema import JsonSchema

logger = structlog.get_logger(__name__)

T = TypeVar("T")

# Sampling defaults per completion variant
CHAT_TEMPERATURE = 0.7
CHAT_TOP_P = 1.0
JSON_TEMPERATURE = 0.0  # Maximize determinism for structured output
JSON_TOP_P = 1.0
TOOL_TEMPERATURE = 0.1  # Deterministic function-call arguments
TOOL_TOP_P = 0.1

JSON_RESPONSE_FORMAT = {"type": "json_object"}


def _pick(value: Optional[float], default: float) -> float:
    return default if value is None else value


class CompletionClient:
    """
    Chat, JSON and tool completions with retries and model fallback.
    
    Attributes:
        settings: Application settings
        model_list: Default model chain parsed from AI_MODELS
        transport: Provider transport (OpenAI-compatible HTTP by default)
        invoker: Single-call invoker wrapping the transport
        orchestrator: Fallback/retry loop
    """
    
    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[BaseCompletionTransport] = None,
        orchestrator: Optional[FallbackRetryOrchestrator] = None,
    ):
        """
        Initialize the client.
        
        Args:
            settings: Application settings (defaults to the process settings)
            transport: Provider transport; built from settings when omitted
            orchestrator: Fallback/retry loop; built from settings when omitted
            
        Raises:
            ConfigurationError: If LLM_API_KEY is missing or AI_MODELS is empty
        """
        self.settings = settings or default_settings
        
        if not self.settings.LLM_API_KEY:
            raise ConfigurationError("Please set LLM_API_KEY in your environment")
        if not self.settings.AI_MODELS.strip():
            raise ConfigurationError("Please set AI_MODELS in your environment")
        
        self.model_list = ModelList.from_string(self.settings.AI_MODELS)
        self.transport = transport or OpenAICompatibleTransport(
            api_key=self.settings.LLM_API_KEY,
            base_url=self.settings.LLM_BASE_URL,
            timeout=self.settings.LLM_TIMEOUT,
        )
        self.invoker = CompletionInvoker(self.transport)
        self.orchestrator = orchestrator or FallbackRetryOrchestrator(
            ExponentialBackoff.from_settings(self.settings)
        )
        
        logger.info(
            "CompletionClient initialized",
            default_models=self.model_list.default_models,
            base_url=self.transport.base_url,
            max_retries=self.settings.MAX_RETRIES,
            timeout=self.settings.LLM_TIMEOUT,
        )
    
    async def chat_completion(self, request: CompletionRequest) -> CompletionResult:
        """
        Free-text completion with automatic retries and fallbacks.
        
        Tool calls returned by the model are passed through unparsed.
        """
        params = build_params(
            temperature=_pick(request.temperature, CHAT_TEMPERATURE),
            top_p=_pick(request.top_p, CHAT_TOP_P),
            max_tokens=request.max_tokens,
            user_id=request.user_id,
        )
        outcome = await self._run(request, params, CompletionKind.CHAT, self._extract)
        return self._to_result(outcome)
    
    async def json_completion(
        self,
        request: CompletionRequest,
        schema: JsonSchema,
    ) -> JsonCompletionResult:
        """
        JSON-mode completion validated against ``schema``.
        
        Invalid JSON and schema violations fail the current attempt only;
        they are retried and fall back like any transient error.
        
        Args:
            request: Completion request (temperature defaults to 0)
            schema: pydantic model class or JSON Schema dict
            
        Returns:
            JsonCompletionResult whose ``object`` is the validated value
        """
        validator = JsonRepairValidator(schema)
        params = build_params(
            temperature=_pick(request.temperature, JSON_TEMPERATURE),
            top_p=_pick(request.top_p, JSON_TOP_P),
            max_tokens=request.max_tokens,
            user_id=request.user_id,
            response_format=JSON_RESPONSE_FORMAT,
        )
        
        def extract_and_validate(completion: Dict[str, Any], model: str) -> tuple[ExtractedContent, Any]:
            extracted = extract_completion_content(completion)
            return extracted, validator.validate(extracted.text, model)
        
        outcome = await self._run(request, params, CompletionKind.JSON, extract_and_validate)
        extracted, parsed = outcome.value
        return JsonCompletionResult(
            content=extracted.text,
            tokens=extracted.token_count,
            model=outcome.model,
            object=parsed,
            attempts=outcome.retry_metadata.attempts,
        )
    
    async def tool_completion(
        self,
        request: CompletionRequest,
        tools: Sequence[Dict[str, Any]],
        tool_choice: Optional[ToolChoice] = None,
    ) -> CompletionResult:
        """
        Completion with tool/function calling.
        
        Args:
            request: Completion request (temperature/top_p default to 0.1)
            tools: Tool definitions in OpenAI format; must not be empty
            tool_choice: Optional "none" / "auto" / "required" or a specific function
            
        Returns:
            CompletionResult with ``tool_calls`` as returned by the model;
            argument strings are not parsed
            
        Raises:
            ConfigurationError: If ``tools`` is empty (no call is made)
        """
        if not tools:
            raise ConfigurationError("Tools must be provided for tool completion")
        
        params = build_params(
            temperature=_pick(request.temperature, TOOL_TEMPERATURE),
            top_p=_pick(request.top_p, TOOL_TOP_P),
            max_tokens=request.max_tokens,
            user_id=request.user_id,
            tools=list(tools),
            tool_choice=tool_choice,
        )
        outcome = await self._run(request, params, CompletionKind.TOOL, self._extract)
        return self._to_result(outcome)
    
    async def health_check(self) -> bool:
        """Whether the provider is reachable."""
        return await self.transport.health_check()
    
    async def close(self):
        """Release provider connections."""
        await self.transport.close()
    
    async def __aenter__(self):
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
    
    @staticmethod
    def _extract(completion: Dict[str, Any], model: str) -> ExtractedContent:
        return extract_completion_content(completion)
    
    @staticmethod
    def _to_result(outcome: OrchestrationResult[ExtractedContent]) -> CompletionResult:
        extracted = outcome.value
        return CompletionResult(
            content=extracted.text,
            tokens=extracted.token_count,
            model=outcome.model,
            tool_calls=extracted.tool_calls,
            attempts=outcome.retry_metadata.attempts,
        )
    
    async def _run(
        self,
        request: CompletionRequest,
        params: Dict[str, Any],
        kind: CompletionKind,
        handle: Callable[[Dict[str, Any], str], T],
    ) -> OrchestrationResult[T]:
        """Resolve models, then orchestrate ``invoke -> handle`` per model."""
        models = self.model_list.resolve(request.model, request.fallback_models)
        timeout = request.timeout or self.settings.LLM_TIMEOUT
        retries = self.settings.MAX_RETRIES if request.retries is None else request.retries
        
        async def call_model(model: str) -> T:
            completion = await self.invoker.invoke(model, request.messages, params, timeout)
            return handle(completion, model)
        
        logger.debug(
            f"Starting {kind.value}",
            operation=kind.value,
            models=models,
            retries=retries,
            timeout=timeout,
            message_count=len(request.messages),
        )
        return await self.orchestrator.run(models, call_model, retries, operation=kind.value)
