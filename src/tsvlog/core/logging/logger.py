# src/tsvlog/core/logging/logger.py
"""
Logger façade.

A Logger is bound to a channel and a minimum severity. It exposes one method
per severity plus the generic `log()`, and for every accepted call:

  1. gates on the logger's minimum level (rejected calls have no effect at all)
  2. captures the process id and a microsecond timestamp
  3. splits an error out of the context (reserved "exception" key)
  4. builds the LogEntry
  5. runs the processors registered for the logger's scope, in order
  6. hands the entry to every handler (each formats and writes it)
  7. echoes the same line to stdout when output is enabled

Everything runs synchronously on the caller's thread. Nothing is queued, so
setters (`set_log_level`, `set_channel`, `set_output`) only affect later calls.
Write failures propagate as LogWriteError; nothing is retried or buffered.

Usage:

    logger = FileLogger("app", "orders", level="info")
    logger.info("user created", {"id": 42})
"""

import os
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Iterable

from tsvlog.exceptions import ConfigurationError

from .entry import LogEntry, build_error_record, extract_error
from .formatters import Formatter, TsvFormatter
from .handlers import EchoHandler, Handler, StreamHandler
from .levels import Severity, parse_level, should_log
from .paths import DEFAULT_LOG_DIR, dated_log_name, resolve_storage_path
from .processors import Processor, ProcessorRegistry, run_processors

# (status_code, message, file, line) -> None
ErrorReporter = Callable[[int, str, str | None, int | None], None]


class Logger:
    def __init__(
        self,
        channel: str = "app",
        handlers: Iterable[Handler] | None = None,
        level: Severity | str = Severity.DEBUG,
        *,
        processors: ProcessorRegistry | None = None,
        output: bool = False,
        error_reporter: ErrorReporter | None = None,
        scope: str | None = None,
    ):
        self._error_reporter = error_reporter
        self.channel = channel
        # processor registry key, fixed for the logger's lifetime
        self._scope = scope or channel
        self._handlers: list[Handler] = list(handlers or [])
        self._registry = processors if processors is not None else ProcessorRegistry()
        self._echo = EchoHandler()
        self._output = output
        self.set_log_level(level)

    # --- configuration ---
    def set_log_level(self, level: Severity | str) -> None:
        """Set the lowest level to log. Invalid names raise ConfigurationError."""
        try:
            self.level = parse_level(level)
        except ConfigurationError as e:
            self._report(e)
            raise

    def set_channel(self, channel: str) -> None:
        """Change the channel rendered on later lines. Registered processors are kept."""
        self.channel = channel

    def set_output(self, enabled: bool) -> None:
        """When enabled, every written line is also printed to stdout."""
        self._output = bool(enabled)

    @property
    def output(self) -> bool:
        return self._output

    def set_formatter(self, formatter: Formatter) -> None:
        """Install `formatter` on every handler, the stdout echo included."""
        for handler in self._handlers:
            handler.set_formatter(formatter)
        self._echo.set_formatter(formatter)

    def add_handler(self, handler: Handler) -> "Logger":
        self._handlers.append(handler)
        return self

    @property
    def handlers(self) -> tuple[Handler, ...]:
        return tuple(self._handlers)

    def add_processor(self, *processors: Processor) -> str:
        """Register processors for this logger's scope; returns the scope."""
        return self._registry.add(self._scope, *processors)

    @property
    def scope(self) -> str:
        return self._scope

    @property
    def processors(self) -> tuple[Processor, ...]:
        return self._registry.get(self._scope)

    def _report(self, error: ConfigurationError) -> None:
        if self._error_reporter is None:
            return
        record = build_error_record(error)
        self._error_reporter(error.status_code(), error.message, record.file, record.line)

    # --- logging ---
    def log(self, level: Severity | str, message: Any, context: dict[str, Any] | None = None) -> None:
        level = parse_level(level)
        if not should_log(level, self.level):
            return

        pid = os.getpid()
        timestamp = datetime.now()
        error, data = extract_error(context)
        entry = LogEntry(
            level=level,
            message=str(message),
            context=data,
            error=error,
            channel=self.channel,
            pid=pid,
            timestamp=timestamp,
        )
        run_processors(self._registry.get(self._scope), entry)

        for handler in self._handlers:
            handler.handle(entry)
        if self._output:
            self._echo.handle(entry)

    def debug(self, message: Any, context: dict[str, Any] | None = None) -> None:
        """Fine-grained informational events most useful when debugging."""
        self.log(Severity.DEBUG, message, context)

    def info(self, message: Any, context: dict[str, Any] | None = None) -> None:
        """Interesting events that show the coarse-grained progress of the application."""
        self.log(Severity.INFO, message, context)

    def notice(self, message: Any, context: dict[str, Any] | None = None) -> None:
        """Normal but significant events."""
        self.log(Severity.NOTICE, message, context)

    def warning(self, message: Any, context: dict[str, Any] | None = None) -> None:
        """Undesirable things that are not necessarily wrong."""
        self.log(Severity.WARNING, message, context)

    def error(self, message: Any, context: dict[str, Any] | None = None) -> None:
        """Runtime errors that do not require immediate action but should be monitored."""
        self.log(Severity.ERROR, message, context)

    def critical(self, message: Any, context: dict[str, Any] | None = None) -> None:
        """Critical conditions: a component unavailable, unexpected exceptions."""
        self.log(Severity.CRITICAL, message, context)

    def alert(self, message: Any, context: dict[str, Any] | None = None) -> None:
        """Action must be taken immediately: site down, database unavailable."""
        self.log(Severity.ALERT, message, context)

    def emergency(self, message: Any, context: dict[str, Any] | None = None) -> None:
        """The system is unusable."""
        self.log(Severity.EMERGENCY, message, context)

    # --- resources ---
    def close(self) -> None:
        for handler in self._handlers:
            handler.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class FileLogger(Logger):
    """
    The built-in file-writing logger: one StreamHandler + TsvFormatter.

    The destination `<log_dir>/<YYYY-MM-DD.HH-MM-SS>-<log_file>.txt` is chosen once
    at construction and kept for the lifetime of the instance.

    Args:
        channel: channel name written on every line.
        log_file: logical file name (without date prefix or extension).
        level: lowest level to log, defaults to "debug".
        log_dir: directory fragment handed to the path resolver.
        path_resolver: `fragment -> absolute Path`; defaults to resolve_storage_path
            (relative to the working directory, parent directories created).
        formatter: defaults to TsvFormatter.

    Raises:
        ConfigurationError: invalid level.
        DestinationError: the path cannot be resolved or opened.
    """

    def __init__(
        self,
        channel: str,
        log_file: str,
        level: Severity | str = Severity.DEBUG,
        *,
        log_dir: str | Path | None = None,
        path_resolver: Callable[[str], Path] | None = None,
        formatter: Formatter | None = None,
        **kwargs: Any,
    ):
        # validate the level before touching the filesystem
        super().__init__(channel, None, level, **kwargs)

        resolver = path_resolver or resolve_storage_path
        fragment = Path(log_dir or DEFAULT_LOG_DIR) / dated_log_name(log_file)
        self.log_file = Path(resolver(str(fragment)))

        formatter = formatter or TsvFormatter()
        self.add_handler(StreamHandler(self.log_file, formatter))
        self._echo.set_formatter(formatter)
