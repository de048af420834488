"""
Retry metadata tracking.

Captures every attempt of one orchestration run for logging and for
callers that want to inspect which models were tried.
"""

from dataclasses import dataclass, field

from completion_layer.models.llm_models import ModelAttempt


@dataclass(frozen=True)
class RetryMetadata:
    """
    Attempt history of one orchestration run.
    
    Attributes:
        total_attempts: Number of provider calls made
        models_tried: Models called, in order, without repeats
        final_model: Model of the last attempt (the successful one on success)
        total_latency_ms: Time from first call to final outcome (ms)
        attempts: One ModelAttempt per call
    """
    
    total_attempts: int
    models_tried: list[str]
    final_model: str
    total_latency_ms: int
    attempts: list[ModelAttempt] = field(default_factory=list)
    
    def __post_init__(self) -> None:
        """Validate metadata invariants."""
        if self.total_attempts < 1:
            raise ValueError("total_attempts must be >= 1")
        
        if self.total_attempts != len(self.attempts):
            raise ValueError("total_attempts must match the number of recorded attempts")
        
        if self.final_model not in self.models_tried:
            raise ValueError(
                f"final_model '{self.final_model}' must be in models_tried"
            )
        
        if self.total_latency_ms < 0:
            raise ValueError("total_latency_ms must be >= 0")
