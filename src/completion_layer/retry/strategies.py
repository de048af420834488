"""
Backoff policy between retries of the same model.

The exact curve is not load-bearing; it only has to be monotonically
non-decreasing and bounded. Moving to a fallback model does not wait.
"""

from dataclasses import dataclass

from completion_layer.config import Settings


@dataclass(frozen=True)
class ExponentialBackoff:
    """
    ``min(max_delay, initial_delay * base ** (retry_number - 1))``.
    
    Attributes:
        initial_delay: Delay before the first retry (seconds)
        base: Multiplier applied per retry
        max_delay: Upper bound on any single delay (seconds)
    """
    
    initial_delay: float = 1.0
    base: float = 2.0
    max_delay: float = 30.0
    
    def __post_init__(self) -> None:
        if self.initial_delay < 0 or self.max_delay < 0:
            raise ValueError("Backoff delays must be >= 0")
        if self.base < 1:
            raise ValueError("Backoff base must be >= 1")
    
    @classmethod
    def from_settings(cls, settings: Settings) -> "ExponentialBackoff":
        return cls(
            initial_delay=settings.RETRY_INITIAL_DELAY,
            base=settings.RETRY_BACKOFF_BASE,
            max_delay=settings.RETRY_MAX_DELAY,
        )
    
    def delay(self, retry_number: int) -> float:
        """Delay before the ``retry_number``-th retry of a run (1-indexed)."""
        if retry_number < 1:
            return 0.0
        try:
            return min(self.max_delay, self.initial_delay * self.base ** (retry_number - 1))
        except OverflowError:
            return self.max_delay
