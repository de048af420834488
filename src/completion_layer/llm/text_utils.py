"""
Text processing utilities for the LLM layer.

Normalizes outgoing message text before it reaches the provider. Some
providers tokenize typographic dashes badly, so en/em dash variants are
replaced with ASCII equivalents. Code (fenced blocks and inline spans) is
left byte-for-byte intact so embedded samples are never corrupted.
"""

import re
from typing import Any

from completion_layer.models.llm_models import ChatMessage, MessageContent


# Figure dash, en dash, non-breaking hyphen, minus sign -> "-"
# Em dash, horizontal bar, two-em dash -> "--"
DASH_REPLACEMENTS: dict[str, str] = {
    "‐": "-",
    "‑": "-",
    "‒": "-",
    "–": "-",
    "−": "-",
    "—": "--",
    "―": "--",
    "⸺": "--",
}

_DASH_PATTERN = re.compile("|".join(re.escape(ch) for ch in DASH_REPLACEMENTS))

# Fenced blocks (an unclosed fence runs to the end of the text) and inline spans
# delimited by equal-length backtick runs (`a`, ``a ` b``)
_CODE_PATTERN = re.compile(r"```.*?(?:```|\Z)|(`+)[^\n]*?\1", re.DOTALL)


def replace_dashes(text: str) -> str:
    """Replace every dash variant in ``text``, code included."""
    return _DASH_PATTERN.sub(lambda m: DASH_REPLACEMENTS[m.group(0)], text)


def sanitize_text(text: str) -> str:
    """
    Replace problematic dash punctuation outside of code.
    
    Args:
        text: Message text, possibly containing markdown code
        
    Returns:
        Text with dashes normalized everywhere except inside ``` fences
        and `inline` code spans.
        
    Examples:
        >>> sanitize_text("a — b")
        'a -- b'
        >>> sanitize_text("`x – y` – z")
        '`x – y` - z'
    """
    if not text or not _DASH_PATTERN.search(text):
        return text
    
    pieces = []
    position = 0
    for match in _CODE_PATTERN.finditer(text):
        pieces.append(replace_dashes(text[position:match.start()]))
        pieces.append(match.group(0))
        position = match.end()
    pieces.append(replace_dashes(text[position:]))
    return "".join(pieces)


def sanitize_content(content: MessageContent) -> MessageContent:
    """Sanitize string content or the text of every ``text`` part."""
    if isinstance(content, str):
        return sanitize_text(content)
    
    if isinstance(content, list):
        parts: list[dict[str, Any]] = []
        for part in content:
            if (
                isinstance(part, dict)
                and part.get("type") == "text"
                and isinstance(part.get("text"), str)
            ):
                part = {**part, "text": sanitize_text(part["text"])}
            parts.append(part)
        return parts
    
    return content


def sanitize_messages(messages: list[ChatMessage]) -> list[dict[str, Any]]:
    """
    Convert messages to wire dicts with sanitized text content.
    
    The input messages are frozen and never modified; new dicts are built.
    ``None`` fields are dropped except ``content``, which the chat API
    expects to be present (assistant tool-call messages send ``null``).
    """
    wire_messages = []
    for message in messages:
        payload = message.model_dump(exclude_none=True)
        payload["content"] = sanitize_content(message.content)
        wire_messages.append(payload)
    return wire_messages


def preview(text: str, limit: int = 200) -> str:
    """Short prefix of ``text`` for log lines."""
    return text if len(text) <= limit else text[:limit] + "..."
