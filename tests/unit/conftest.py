"""Unit test fixtures (mocks and stubs).

Provides mock objects for testing without a provider.
"""

from unittest.mock import AsyncMock

import pytest

from completion_layer.client import CompletionClient
from completion_layer.llm.base_client import BaseCompletionTransport
from fixtures.helpers import SleepRecorder


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def mock_transport():
    """Mock provider transport; set ``invoke.return_value`` / ``side_effect`` per test."""
    mock = AsyncMock(spec=BaseCompletionTransport)
    mock.base_url = "https://llm.test/v1"
    mock.invoke = AsyncMock()
    mock.health_check = AsyncMock(return_value=True)
    mock.close = AsyncMock()
    return mock


@pytest.fixture
def client(test_settings, mock_transport) -> CompletionClient:
    """CompletionClient wired to the mock transport."""
    return CompletionClient(settings=test_settings, transport=mock_transport)
