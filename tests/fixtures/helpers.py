"""Helpers for building provider failures and inspecting transport calls."""

from completion_layer.llm.exceptions import LLMHTTPStatusError


class SleepRecorder:
    """Stand-in for asyncio.sleep that records requested delays."""
    
    def __init__(self):
        self.delays: list[float] = []
    
    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class StatusError(Exception):
    """Foreign exception carrying a ``status`` attribute, like SDK errors do."""
    
    def __init__(self, message: str, status):
        super().__init__(message)
        self.status = status


def http_error(status_code: int, message: str = "Provider error") -> LLMHTTPStatusError:
    """LLMHTTPStatusError as raised by the HTTP transport."""
    return LLMHTTPStatusError(message, details={"status": status_code}, status_code=status_code)


def invoked_models(mock_transport) -> list[str]:
    """Model names of every transport call, in order."""
    return [call.args[0] for call in mock_transport.invoke.call_args_list]


def invoked_params(mock_transport, index: int = -1) -> dict:
    """Request parameters of one transport call (last by default)."""
    return mock_transport.invoke.call_args_list[index].args[2]
