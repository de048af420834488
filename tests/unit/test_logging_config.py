"""Unit tests for structlog configuration."""

import logging

import pytest
import structlog

from completion_layer.logging_config import (
    MAX_VALUE_LENGTH,
    AppContext,
    clip_model_output,
    configure_logging,
    mask_secrets,
)


@pytest.fixture(autouse=True)
def restore_logging():
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
    structlog.reset_defaults()


class TestProcessors:
    """Test the completion-specific processors."""

    def test_app_context_from_settings(self, test_settings):
        event_dict = AppContext(test_settings)(None, "info", {"event": "hello"})

        assert event_dict == {
            "event": "hello",
            "app": "Completion Layer (Test)",
            "version": "0.1.0",
            "environment": "development",
        }

    def test_app_context_keeps_explicit_values(self, test_settings):
        event_dict = AppContext(test_settings)(None, "info", {"event": "x", "environment": "canary"})

        assert event_dict["environment"] == "canary"

    def test_secrets_masked(self):
        event_dict = mask_secrets(
            None, "info", {"event": "x", "api_key": "sk-live", "authorization": "Bearer sk-live", "model": "m1"}
        )

        assert event_dict["api_key"] == "***"
        assert event_dict["authorization"] == "***"
        assert event_dict["model"] == "m1"

    def test_long_model_output_clipped(self):
        long_text = "x" * (MAX_VALUE_LENGTH + 100)

        event_dict = clip_model_output(
            None, "error", {"event": "x", "error": long_text, "errors": [long_text, "short"], "model": long_text}
        )

        assert event_dict["error"] == "x" * MAX_VALUE_LENGTH + "...[truncated]"
        assert event_dict["errors"][0].endswith("...[truncated]")
        assert event_dict["errors"][1] == "short"
        assert event_dict["model"] == long_text


class TestConfigureLogging:
    """Test configure_logging."""

    def test_development_uses_console_renderer(self, test_settings):
        configure_logging(test_settings)

        root_logger = logging.getLogger()
        assert root_logger.level == logging.DEBUG
        assert len(root_logger.handlers) == 1
        formatter = root_logger.handlers[0].formatter
        assert isinstance(formatter, structlog.stdlib.ProcessorFormatter)
        assert isinstance(formatter.processors[-1], structlog.dev.ConsoleRenderer)

    def test_production_uses_json_renderer(self, test_settings):
        settings = test_settings.model_copy(update={"ENVIRONMENT": "production", "LOG_LEVEL": "warning"})

        configure_logging(settings)

        root_logger = logging.getLogger()
        assert root_logger.level == logging.WARNING
        formatter = root_logger.handlers[0].formatter
        assert isinstance(formatter.processors[-1], structlog.processors.JSONRenderer)

    def test_unknown_level_falls_back_to_info(self, test_settings):
        configure_logging(test_settings.model_copy(update={"LOG_LEVEL": "chatty"}))

        assert logging.getLogger().level == logging.INFO
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_rendered_event_is_masked(self, test_settings, capsys):
        configure_logging(test_settings.model_copy(update={"ENVIRONMENT": "production"}))

        structlog.get_logger("completion_layer.test").warning("Provider rejected key", api_key="sk-live")

        output = capsys.readouterr().out
        assert "sk-live" not in output
        assert '"app": "Completion Layer (Test)"' in output
