# src/tsvlog/core/logging/entry.py
"""
The log entry data model and error extraction.

One LogEntry is built per accepted `Logger.log()` call and dropped once the
handlers have written it; nothing buffers entries.

Level, message, channel, pid, timestamp and error are fixed at construction.
The context mapping is the only part that changes afterwards, and only through
the processor chain (see processors.invoke_processor).

Error extraction
----------------
If the caller puts an error under the reserved "exception" key:

    logger.error("payment failed", {"exception": exc, "order": 7})

the value is turned into an ErrorRecord and the key is dropped from the context
that reaches the formatter. A value counts as an error when it is a Python
exception, or any object exposing `message`, `code`, `file`, `line` and `trace`
attributes. Any other value stays in the context as ordinary data.
"""

import traceback
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .levels import Severity

# Reserved context key holding an error/exception value.
EXCEPTION_KEY = "exception"

_ERROR_ATTRIBUTES = ("message", "code", "file", "line", "trace")


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error detail rendered into the last field of a log line."""

    message: str
    code: Any = 0
    file: str | None = None
    line: int | None = None
    trace: list = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        # key order is part of the rendered format
        return {
            "message": self.message,
            "code": self.code,
            "file": self.file,
            "line": self.line,
            "trace": self.trace,
        }


@dataclass(frozen=True)
class LogEntry:
    level: Severity
    message: str
    context: dict[str, Any] = field(default_factory=dict)
    error: ErrorRecord | None = None
    channel: str = "app"
    pid: int = 0
    timestamp: datetime = field(default_factory=datetime.now)


def is_error_like(value: Any) -> bool:
    if isinstance(value, BaseException):
        return True
    return all(hasattr(value, attr) for attr in _ERROR_ATTRIBUTES)


def _exception_code(exc: BaseException) -> Any:
    for attr in ("code", "errno"):
        value = getattr(exc, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return 0


def build_error_record(value: Any) -> ErrorRecord:
    """
    Build an ErrorRecord from an exception or an error-like object.

    For exceptions, file/line point at the frame the exception was raised from and
    trace lists every frame of its traceback (outermost first). An exception that
    was never raised has no traceback, so file/line are None and trace is empty.
    """
    if isinstance(value, BaseException):
        frames = traceback.extract_tb(value.__traceback__) if value.__traceback__ else []
        last = frames[-1] if frames else None
        return ErrorRecord(
            message=str(value),
            code=_exception_code(value),
            file=last.filename if last else None,
            line=last.lineno if last else None,
            trace=[
                {"file": frame.filename, "line": frame.lineno, "function": frame.name}
                for frame in frames
            ],
        )

    trace = value.trace
    if isinstance(trace, str):
        # a pre-rendered trace string stays one item
        trace = [trace] if trace else []
    return ErrorRecord(
        message=str(value.message),
        code=value.code,
        file=value.file,
        line=value.line,
        trace=list(trace) if trace else [],
    )


def extract_error(context: dict[str, Any] | None) -> tuple[ErrorRecord | None, dict[str, Any]]:
    """
    Split an error out of `context`.

    Returns (error_record_or_None, context_copy). The caller's mapping is never
    modified; the copy keeps the original key order minus the reserved key.
    """
    data = dict(context) if context else {}
    value = data.get(EXCEPTION_KEY)
    if value is None or not is_error_like(value):
        return None, data

    del data[EXCEPTION_KEY]
    return build_error_record(value), data
