# src/tsvlog/core/logging/builder.py
"""
Logging builder: create a configured Logger from Settings.

This module:
 - builds the processor registry for a channel (request id, redaction)
 - picks the formatter (tsv | json) from LOG_FORMAT
 - resolves the dated log file under LOG_DIR and wires a FileLogger
 - keeps a reference to the logger installed by setup_logging() so
   shutdown_logging() can close it at exit.

Configuration knobs (on your Settings object):
 - LOG_LEVEL: lowest level to log (NONE..EMERGENCY)
 - LOG_CHANNEL: channel written on every line
 - LOG_FORMAT: "tsv" (default, durable on-disk format) or "json"
 - LOG_TO_STDOUT: echo every line to stdout as well
 - LOG_DIR, LOG_FILE: destination directory and logical file name
 - LOG_REDACT, LOG_REQUEST_ID: enable the built-in processors
 - ENV: stamped into JSON lines

Any object with these attributes works (tests use SimpleNamespace); missing
optional attributes fall back to the Settings defaults.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional
from pathlib import Path

from .formatters import Formatter, JsonFormatter, TsvFormatter
from .logger import ErrorReporter, FileLogger, Logger
from .paths import DEFAULT_LOG_DIR
from .processors import ProcessorRegistry, redact_processor, request_id_processor

# Settings type (avoid calling get_settings() at import time)
from tsvlog.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

# Logger installed by setup_logging(), closed by shutdown_logging()
_ACTIVE_LOGGER: Optional[Logger] = None


def make_formatter(settings: Settings) -> Formatter:
    if getattr(settings, "LOG_FORMAT", "tsv") == "json":
        return JsonFormatter(env=getattr(settings, "ENV", None))
    return TsvFormatter()


def make_processor_registry(settings: Settings, channel: str) -> ProcessorRegistry:
    """
    Register the built-in processors for `channel`.

    request_id runs first so redaction sees the final context.
    """
    registry = ProcessorRegistry()
    if getattr(settings, "LOG_REQUEST_ID", True):
        registry.add(channel, request_id_processor)
    if getattr(settings, "LOG_REDACT", True):
        registry.add(channel, redact_processor)
    return registry


def make_logger(
    settings: Settings,
    *,
    path_resolver: Callable[[str], Path] | None = None,
    error_reporter: ErrorReporter | None = None,
) -> FileLogger:
    """
    Build a FileLogger from settings.

    Raises:
        ConfigurationError: LOG_LEVEL is not a level name.
        DestinationError: the log file cannot be resolved or opened.
    """
    channel = getattr(settings, "LOG_CHANNEL", "app")
    return FileLogger(
        channel,
        getattr(settings, "LOG_FILE", "app"),
        getattr(settings, "LOG_LEVEL", "INFO"),
        log_dir=getattr(settings, "LOG_DIR", None) or DEFAULT_LOG_DIR,
        path_resolver=path_resolver,
        formatter=make_formatter(settings),
        processors=make_processor_registry(settings, channel),
        scope=channel,
        output=bool(getattr(settings, "LOG_TO_STDOUT", False)),
        error_reporter=error_reporter,
    )


def setup_logging(settings: Settings | None = None, **kwargs) -> FileLogger:
    """
    Build the application logger and remember it for shutdown_logging().

    A previously installed logger is closed first so its file handle is not leaked.
    """
    global _ACTIVE_LOGGER

    settings = settings if settings is not None else get_settings()
    new_logger = make_logger(settings, **kwargs)

    if _ACTIVE_LOGGER is not None:
        _ACTIVE_LOGGER.close()
    _ACTIVE_LOGGER = new_logger

    logger.debug("Logging to %s (channel=%s, level=%s)",
                 new_logger.log_file, new_logger.channel, new_logger.level.name)
    return new_logger


def get_logger() -> Optional[Logger]:
    """Return the logger installed by setup_logging(), if any."""
    return _ACTIVE_LOGGER


def shutdown_logging() -> None:
    """Close the installed logger's destinations and forget it."""
    global _ACTIVE_LOGGER
    active = _ACTIVE_LOGGER
    if active is None:
        return
    _ACTIVE_LOGGER = None
    active.close()
