"""
Orchestrator exceptions.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from completion_layer.retry.metadata import RetryMetadata


class AllModelsFailedError(Exception):
    """
    Raised when transient failures exhausted every model of the chain.
    
    Callers cannot tell "retries exhausted" from "fallbacks exhausted"
    apart except through ``model``; both are final failures.
    
    Attributes:
        operation: Completion variant ("chat completion", ...)
        model: Model of the last attempt
        last_error: Most recent underlying failure (also ``__cause__``)
        retry_metadata: Complete attempt history
    """

    def __init__(
        self,
        operation: str,
        last_error: BaseException,
        retry_metadata: "RetryMetadata",
    ) -> None:
        self.operation = operation
        self.model = retry_metadata.final_model
        self.last_error = last_error
        self.retry_metadata = retry_metadata
        
        super().__init__(
            f"All models failed for {operation} after {retry_metadata.total_attempts} attempts "
            f"(last model {self.model}): {last_error}"
        )

    @property
    def attempts(self) -> int:
        return self.retry_metadata.total_attempts
