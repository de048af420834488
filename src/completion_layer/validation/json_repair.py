"""
JSON repair and parse.

Models asked for JSON often wrap it in a markdown fence or leave trailing
commas behind. The cheapest fixes are applied first and only when needed:
already-valid JSON passes through byte-for-byte.
"""

import json
import re
from typing import Any

import structlog

from completion_layer.llm.text_utils import preview
from completion_layer.monitoring.metrics import validation_failures_total
from .exceptions import InvalidJSONError

logger = structlog.get_logger(__name__)


_OPENING_FENCE = re.compile(r"^```(?:json)?", re.IGNORECASE)
_CLOSING_FENCE = re.compile(r"```$")
# String literals are matched first so commas inside them are never touched
_TRAILING_COMMAS = re.compile(r'("(?:\\.|[^"\\])*")|(?:,\s*)+([}\]])')


def strip_code_fence(raw: str) -> str:
    """Remove a leading ``` / ```json fence and a trailing ``` fence."""
    stripped = raw.strip()
    if not stripped.startswith("```"):
        return raw
    stripped = _OPENING_FENCE.sub("", stripped, count=1)
    stripped = _CLOSING_FENCE.sub("", stripped.rstrip())
    return stripped.strip()


def remove_trailing_commas(text: str) -> str:
    """Drop commas that directly precede a closing brace or bracket."""
    return _TRAILING_COMMAS.sub(lambda m: m.group(1) or m.group(2), text)


def clean_json(raw: str) -> str:
    """
    Repair near-valid JSON text.
    
    Examples:
        >>> clean_json('```json\\n{"a":1}\\n```')
        '{"a":1}'
        >>> clean_json('{"a":1,,}')
        '{"a":1}'
    """
    return remove_trailing_commas(strip_code_fence(raw))


class JsonRepairParser:
    """
    Repairs and parses model output into a Python value.
    
    Raises InvalidJSONError (naming the model) when the text is still not
    JSON after cleanup.
    """
    
    def parse(self, content: str, model: str) -> Any:
        """
        Parse JSON content from a model response.
        
        Args:
            content: Extracted response text
            model: Model that produced it (for the error message)
            
        Returns:
            Parsed JSON value
            
        Raises:
            InvalidJSONError: If content is empty or not valid JSON after cleanup
        """
        if not content or not content.strip():
            validation_failures_total.labels(
                stage="json_parse", error_type="empty_content"
            ).inc()
            logger.error("Empty content from model", model=model)
            raise InvalidJSONError(model, raw_content=content, parse_error="Empty content")
        
        cleaned = clean_json(content)
        try:
            return json.loads(cleaned)
        except json.JSONDecodeError as e:
            validation_failures_total.labels(
                stage="json_parse", error_type="json_decode_error"
            ).inc()
            logger.error(
                "Invalid JSON from model",
                model=model,
                content_preview=preview(content),
                error=e.msg,
            )
            raise InvalidJSONError(
                model,
                raw_content=content,
                parse_error=f"{e.msg} at line {e.lineno} col {e.colno}",
            ) from e
