"""
Candidate model list resolution.

The process-wide default list is parsed once at startup from a
comma-separated string (``AI_MODELS``). An empty default list is a
configuration error raised at construction, never at call time.
"""

from typing import Iterable, Optional, Sequence

from completion_layer.llm.exceptions import ConfigurationError


def parse_model_list(raw: str) -> list[str]:
    """Split a comma-separated model list, trimming and dropping empty entries."""
    return [name.strip() for name in raw.split(",") if name.strip()]


def dedupe(models: Iterable[str]) -> list[str]:
    """Remove duplicates, keeping the first occurrence of each name."""
    seen: set[str] = set()
    ordered = []
    for model in models:
        if model not in seen:
            seen.add(model)
            ordered.append(model)
    return ordered


class ModelList:
    """
    Builds the ordered, deduplicated sequence of models to try.
    
    Attributes:
        default_models: Process-wide fallback chain (read-only after startup)
    """
    
    def __init__(self, default_models: Sequence[str]):
        """
        Args:
            default_models: Default chain, used when a call names no model
            
        Raises:
            ConfigurationError: If the default chain is empty
        """
        models = dedupe(name.strip() for name in default_models if name and name.strip())
        if not models:
            raise ConfigurationError(
                "AI_MODELS must contain at least one model",
                details={"default_models": list(default_models)},
            )
        self._default_models = tuple(models)
    
    @classmethod
    def from_string(cls, raw: str) -> "ModelList":
        """Build from a comma-separated string such as ``AI_MODELS``."""
        return cls(parse_model_list(raw or ""))
    
    @property
    def default_models(self) -> list[str]:
        return list(self._default_models)
    
    def resolve(
        self,
        primary: Optional[str] = None,
        fallbacks: Optional[Sequence[str]] = None,
    ) -> list[str]:
        """
        Return the effective model list for one call.
        
        - primary given: primary first, explicit fallbacks after it
        - only fallbacks given: the fallbacks, in order
        - neither: the default chain
        
        The result is never empty.
        """
        explicit = ([primary] if primary else []) + list(fallbacks or [])
        explicit = [name.strip() for name in explicit if name and name.strip()]
        if not explicit:
            return self.default_models
        return dedupe(explicit)
    
    def __len__(self) -> int:
        return len(self._default_models)
    
    def __repr__(self) -> str:
        return f"ModelList({list(self._default_models)!r})"
