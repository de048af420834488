"""
Content extraction from raw chat-completion payloads.

Turns the provider's response dict into ``ExtractedContent``. Every lookup is
tolerant of missing keys: a response without choices, without a message or
without usage data yields empty text and a token count of 0 instead of an
exception.
"""

from typing import Any, Optional

from completion_layer.models.llm_models import ExtractedContent, ToolCall, ToolCallFunction


def normalize_content(content: Any) -> str:
    """
    Flatten message content to a single string.

    Strings are returned as is. Lists of typed parts contribute the ``text`` of
    every part whose type is ``text``, concatenated in order. Anything else
    (``None``, unexpected shapes) becomes an empty string.
    """
    if isinstance(content, str):
        return content
    
    if isinstance(content, list):
        return "".join(
            part["text"]
            for part in content
            if isinstance(part, dict)
            and part.get("type") == "text"
            and isinstance(part.get("text"), str)
        )
    
    return ""


def extract_tool_calls(message: dict[str, Any]) -> Optional[list[ToolCall]]:
    """Copy tool calls verbatim; arguments stay a raw JSON string."""
    raw_calls = message.get("tool_calls") or []
    if not raw_calls:
        return None
    
    tool_calls = []
    for raw_call in raw_calls:
        function = raw_call.get("function") or {}
        tool_calls.append(
            ToolCall(
                id=raw_call.get("id") or "",
                type=raw_call.get("type") or "function",
                function=ToolCallFunction(
                    name=function.get("name") or "",
                    arguments=function.get("arguments") or "",
                ),
            )
        )
    return tool_calls


def extract_token_count(completion: dict[str, Any]) -> int:
    """Total tokens from ``usage``, or 0 when the provider omits it."""
    usage = completion.get("usage") or {}
    total = usage.get("total_tokens")
    return total if isinstance(total, int) and not isinstance(total, bool) else 0


def extract_completion_content(completion: dict[str, Any]) -> ExtractedContent:
    """
    Normalize a raw chat-completion response.
    
    Args:
        completion: Decoded JSON body returned by the provider
        
    Returns:
        ExtractedContent with trimmed text, tool calls (if any) and token count
    """
    choices = completion.get("choices") or []
    message = choices[0].get("message") if choices and isinstance(choices[0], dict) else None
    if not message:
        return ExtractedContent(text="", tool_calls=None, token_count=0)
    
    token_count = extract_token_count(completion)
    text = normalize_content(message.get("content")).strip()
    return ExtractedContent(
        text=text,
        tool_calls=extract_tool_calls(message),
        token_count=token_count,
    )
