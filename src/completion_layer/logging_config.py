"""Structured logging for the completion layer.

Host services call ``configure_logging(settings)`` once at startup. Every
event then carries the application identity, provider credentials are masked
before rendering, and echoed model output is clipped so a runaway completion
cannot flood the log pipeline.

Production renders JSON lines; any other environment renders to the console.
"""

import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from completion_layer.config import Settings, settings as default_settings


# Keys whose values must never reach a log sink
SECRET_KEYS = frozenset({"api_key", "llm_api_key", "authorization", "headers"})

# Keys that may echo model output or provider error bodies
CLIPPED_KEYS = frozenset({"error", "content_preview", "errors", "body"})
MAX_VALUE_LENGTH = 500

# Chatty third-party loggers; the transport logs provider traffic itself
QUIET_LOGGERS = ("httpx", "httpcore", "asyncio")


class AppContext:
    """Processor stamping app name, version and environment on each event."""

    def __init__(self, settings: Settings):
        self.context = {
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
        }

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        for key, value in self.context.items():
            event_dict.setdefault(key, value)
        return event_dict


def mask_secrets(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Replace credential-bearing values with a fixed marker."""
    for key in SECRET_KEYS.intersection(event_dict):
        event_dict[key] = "***"
    return event_dict


def _clip(value: Any) -> Any:
    if isinstance(value, str) and len(value) > MAX_VALUE_LENGTH:
        return value[:MAX_VALUE_LENGTH] + "...[truncated]"
    if isinstance(value, list):
        return [_clip(item) for item in value]
    return value


def clip_model_output(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Shorten long error bodies and content previews."""
    for key in CLIPPED_KEYS.intersection(event_dict):
        event_dict[key] = _clip(event_dict[key])
    return event_dict


def build_processors(settings: Settings) -> list[Processor]:
    """Processors shared by structlog loggers and foreign stdlib records."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        AppContext(settings),
        mask_secrets,
        clip_model_output,
    ]
    if is_production(settings):
        processors.append(structlog.processors.format_exc_info)
    return processors


def is_production(settings: Settings) -> bool:
    return settings.ENVIRONMENT.lower() == "production"


def configure_logging(settings: Optional[Settings] = None) -> None:
    """
    Route structlog and stdlib logging through one renderer.

    Args:
        settings: Source of LOG_LEVEL, ENVIRONMENT, APP_NAME and APP_VERSION
            (defaults to the process settings). Unknown levels fall back to INFO.
    """
    settings = settings or default_settings
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    shared_processors = build_processors(settings)
    renderer: Processor = (
        structlog.processors.JSONRenderer()
        if is_production(settings)
        else structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    )

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=shared_processors,
        )
    )
    handler.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    structlog.get_logger(__name__).info(
        "Logging configured",
        log_level=logging.getLevelName(level),
        renderer="json" if is_production(settings) else "console",
    )
