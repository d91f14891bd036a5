# src/tsvlog/core/logging/handlers.py
"""
Handlers: deliver formatted entries to a destination.

Pipeline position:

    Logger → processors → Handler (level gate) → Formatter → destination

Every handler owns exactly one Formatter (replaceable at any time, effective on
the next write) and an optional minimum level of its own. `handle()` is the
template method: it applies the handler's level gate, then calls the
destination-specific `write()`. Handlers never mutate the entry.

Handlers in this module:
  - StreamHandler: appends to a file path, a `file://` URL, or any already-open
    writable stream. Each write holds a thread lock plus an exclusive advisory
    file lock for exactly the duration of that write, so concurrent appends from
    threads and processes never interleave inside a line.
  - EchoHandler: writes to the current `sys.stdout`, no locking (single process).
"""

import logging
import os
import sys
import threading
from abc import ABC, abstractmethod

from tsvlog.exceptions import DestinationError, LogWriteError

from .entry import LogEntry
from .formatters import Formatter, TsvFormatter
from .levels import Severity, parse_level, should_log
from .locking import acquire_lock, release_lock, supports_locking

logger = logging.getLogger(__name__)


class Handler(ABC):
    def __init__(self, formatter: Formatter | None = None, level: Severity | str = Severity.DEBUG):
        self._formatter = formatter or TsvFormatter()
        self.level = parse_level(level)

    # formatter capability: get_formatter / set_formatter
    def get_formatter(self) -> Formatter:
        return self._formatter

    def set_formatter(self, formatter: Formatter) -> "Handler":
        self._formatter = formatter
        return self

    def set_level(self, level: Severity | str) -> "Handler":
        self.level = parse_level(level)
        return self

    def handle(self, entry: LogEntry) -> None:
        if should_log(entry.level, self.level):
            self.write(entry)

    @abstractmethod
    def write(self, entry: LogEntry) -> None:
        raise NotImplementedError

    def close(self) -> None:
        """Release the destination. Default: nothing to release."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class StreamHandler(Handler):
    """
    Append-only stream/file handler.

    Args:
        destination: a path (str / os.PathLike), a "file://..." URL, or an open
            object with a callable `write`. Paths are opened in append mode and
            the file is created if needed; the handler owns and later closes it.
            Externally supplied streams are written to but left open on close().
        formatter: defaults to TsvFormatter.
        level: handler-level minimum, defaults to DEBUG (accept all).

    Raises:
        DestinationError: the destination is neither a usable path nor a stream.
    """

    def __init__(
        self,
        destination,
        formatter: Formatter | None = None,
        *,
        level: Severity | str = Severity.DEBUG,
        encoding: str = "utf-8",
    ):
        super().__init__(formatter, level)
        self.encoding = encoding
        self._lock = threading.Lock()
        self._stream, self._owns_stream, self.name = self._open_stream(destination)

    def _open_stream(self, destination):
        if isinstance(destination, (str, bytes, os.PathLike)):
            path = os.fsdecode(destination)
            if "://" in path:
                scheme, _, rest = path.partition("://")
                if scheme.lower() != "file":
                    raise DestinationError(f"failed to open stream: unsupported scheme {scheme!r}")
                path = rest
            if not path:
                raise DestinationError("failed to open stream: empty path")
            try:
                stream = open(path, "a", encoding=self.encoding, errors="backslashreplace")
            except OSError as e:
                raise DestinationError(f"failed to open stream {path}: {e}") from e
            logger.debug("Opened log destination %s", path)
            return stream, True, path

        if callable(getattr(destination, "write", None)):
            if getattr(destination, "closed", False):
                raise DestinationError("failed to open stream: stream is already closed")
            return destination, False, getattr(destination, "name", repr(destination))

        raise DestinationError(f"failed to open stream: {destination!r} is not a path or stream")

    @property
    def closed(self) -> bool:
        return self._stream is None

    def write(self, entry: LogEntry) -> None:
        if self._stream is None:
            return
        line = self.get_formatter().format(entry)

        with self._lock:
            stream = self._stream
            if stream is None:
                return
            lockable = supports_locking(stream)
            try:
                if lockable:
                    acquire_lock(stream)
                try:
                    stream.write(line)
                    stream.flush()
                finally:
                    if lockable:
                        self._release(stream)
            except (OSError, ValueError) as e:
                raise LogWriteError(
                    f"Could not write to log destination {self.name} for channel {entry.channel}",
                    entry=entry,
                ) from e

    def _release(self, stream) -> None:
        try:
            release_lock(stream)
        except OSError as e:
            # a failed unlock never replaces the write error
            logger.warning("Could not unlock log destination %s: %s", self.name, e)

    def close(self) -> None:
        with self._lock:
            stream, self._stream = self._stream, None
        if stream is None:
            return
        if self._owns_stream:
            stream.close()
        logger.debug("Closed log destination %s", self.name)


class EchoHandler(Handler):
    """Writes formatted entries to standard output."""

    def write(self, entry: LogEntry) -> None:
        line = self.get_formatter().format(entry)
        try:
            # looked up per write so redirected/captured stdout is honoured
            sys.stdout.write(line)
            sys.stdout.flush()
        except (OSError, ValueError) as e:
            raise LogWriteError(
                f"Could not echo log entry for channel {entry.channel} to stdout", entry=entry
            ) from e
