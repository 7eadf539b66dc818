"""
Bootstrap: logging setup and settings loading for host applications.

The request contract itself does no I/O. Applications that wire a
credential store call load_settings() once at startup, which validates
configuration and configures structlog, then use settings.defaults with
RequestBuilder.from_defaults().
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from typing import Any

import structlog

from keypair_spec.config import AppSettings


def configure_structlog(
    log_level: str = "INFO",
    json_output: bool = False,
    logger_factory: Callable[..., Any] | None = None,
) -> None:
    """
    Configure structlog for the host application.

    json_output selects JSON lines instead of plain key=value console output.
    logger_factory lets the host route events to its own sink; by default
    they are printed to stderr so stdout stays free for the application.
    Unknown level names fall back to INFO.
    """
    renderer: structlog.typing.Processor = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelNamesMapping().get(log_level.strip().upper(), logging.INFO)
        ),
        logger_factory=logger_factory or structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=True,
    )


def load_settings(**overrides: object) -> AppSettings:
    """
    Load AppSettings and configure logging from them.

    Keyword overrides take priority over environment and .env values.
    Raises pydantic.ValidationError on invalid configuration.
    """
    settings = AppSettings(**overrides)  # type: ignore[arg-type]
    configure_structlog(settings.log_level, json_output=settings.log_json)
    structlog.get_logger().info(
        "app.settings_loaded",
        log_level=settings.log_level,
        validity_days=settings.defaults.validity_days,
        encryption_required=settings.defaults.encryption_required,
    )
    return settings
