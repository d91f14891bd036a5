# src/tsvlog/core/logging/formatters.py

"""
Formatters for the logging subsystem.

A formatter turns one LogEntry into one newline-terminated line of text. It is
pure: it never mutates the entry, and formatting the same entry twice yields
byte-identical output.

This module provides three formatters:

  - TsvFormatter: the reference, durable on-disk format. Seven tab-separated
    fields per line:

        2025-09-26 11:08:38.680075	[INFO]	[app]	[pid:23888]	user created	{"id":42}	{}

    Readers and tailers of log files depend on exactly one record per line and
    this field order, so embedded line breaks are replaced by three spaces.

  - JsonFormatter: one JSON object per line, for log collectors (ELK, Fluentd,
    CloudWatch, etc.). Same fields, same single-line guarantee.

  - ColorFormatter: the TSV line with the level field wrapped in ANSI colour
    codes. Intended for the echo handler on developer terminals; avoid it for
    files since the escape codes end up in the data.

Serialization rules shared by all three:
  - context and error always serialize to a JSON object, `{}` when empty.
  - values JSON cannot represent are converted with `str()` (default=str).
  - if serialization still fails (e.g. a circular reference), the context falls
    back to `{}` and the error to `{"message": "..."}`. Logging never fails
    because auxiliary data is unserializable.
  - lone surrogates are escaped as `\\udcXX`, so every line encodes as UTF-8.
"""

import json
import re
from abc import ABC, abstractmethod
from typing import Any

from .entry import ErrorRecord, LogEntry

TAB = "\t"
TIME_FORMAT = "%Y-%m-%d %H:%M:%S.%f"
EMPTY_OBJECT = "{}"

_LINE_BREAKS = re.compile(r"\r\n|\r|\n")


def single_line(text: str) -> str:
    """
    Replace every embedded line break with three spaces.

    Code points UTF-8 cannot encode (lone surrogates from surrogateescape-decoded
    file names, for instance) are written as `\\udcXX` escapes.
    """
    text = text.encode("utf-8", "backslashreplace").decode("utf-8")
    return _LINE_BREAKS.sub("   ", text)


def to_json(data: Any) -> str:
    # compact separators: {"id":42}; "/" is never escaped by the json module
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"), default=str)


def encode_context(context: dict[str, Any] | None) -> str:
    if not context:
        return EMPTY_OBJECT
    try:
        return to_json(context)
    except (TypeError, ValueError, RecursionError):
        return EMPTY_OBJECT


def encode_error(error: ErrorRecord | None) -> str:
    if error is None:
        return EMPTY_OBJECT
    try:
        return to_json(error.to_dict())
    except (TypeError, ValueError, RecursionError):
        # keep at least the error text
        return to_json({"message": str(error.message)})


class Formatter(ABC):
    """
    Formatter contract: LogEntry -> rendered text line.

    Subclasses implement `format()` and must return exactly one line ending in
    "\\n". Configuration (e.g. time format) is set at construction; there is no
    other state.
    """

    def __init__(self, *, time_format: str = TIME_FORMAT):
        self.time_format = time_format

    def format_time(self, entry: LogEntry) -> str:
        return entry.timestamp.strftime(self.time_format)

    @abstractmethod
    def format(self, entry: LogEntry) -> str:
        raise NotImplementedError


class TsvFormatter(Formatter):
    """
    Reference tab-separated formatter.

    Field order: timestamp, [LEVEL], [channel], [pid:N], message, context-json,
    error-json. The timestamp has microsecond precision and sorts lexicographically.
    """

    def fields(self, entry: LogEntry) -> list[str]:
        return [
            self.format_time(entry),
            f"[{entry.level.label}]",
            f"[{single_line(entry.channel)}]",
            f"[pid:{entry.pid}]",
            single_line(entry.message.strip()),
            single_line(encode_context(entry.context)),
            single_line(encode_error(entry.error)),
        ]

    def format(self, entry: LogEntry) -> str:
        return TAB.join(self.fields(entry)) + "\n"


class JsonFormatter(Formatter):
    """
    Structured JSON-lines formatter.

    Emits {"timestamp", "level", "channel", "pid", "message", "context", "error"}.
    `context` and `error` are nested objects (never null). Extra static fields
    (e.g. service, env) can be passed at construction and are appended after the
    standard ones.
    """

    def __init__(self, *, time_format: str = TIME_FORMAT, **static_fields: Any):
        super().__init__(time_format=time_format)
        self.static_fields = static_fields

    def format(self, entry: LogEntry) -> str:
        record: dict[str, Any] = {
            "timestamp": self.format_time(entry),
            "level": entry.level.label,
            "channel": entry.channel,
            "pid": entry.pid,
            "message": entry.message.strip(),
        }
        record.update(self.static_fields)

        # Re-parse the already-safe encodings so the fallbacks apply here too.
        record["context"] = json.loads(encode_context(entry.context))
        record["error"] = json.loads(encode_error(entry.error))

        return single_line(to_json(record)) + "\n"


class ColorFormatter(TsvFormatter):
    """
    Terminal-friendly TSV formatter.

    Identical to TsvFormatter except the `[LEVEL]` field is coloured:
      - DEBUG: cyan, INFO: green, NOTICE: blue, WARNING: yellow,
      - ERROR: red, CRITICAL and above: bold on red background.
    """

    COLOR_CODES = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "NOTICE": "\033[34m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[1;41m",
        "ALERT": "\033[1;41m",
        "EMERGENCY": "\033[1;41m",
        # Reset all styles so colour does not spill into the rest of the line.
        "RESET": "\033[0m",
    }

    def fields(self, entry: LogEntry) -> list[str]:
        fields = super().fields(entry)
        color = self.COLOR_CODES.get(entry.level.label, "")
        fields[1] = f"{color}{fields[1]}{self.COLOR_CODES['RESET']}"
        return fields


"""
-------------------------------------------------
If you want a new custom format, the steps are:
-------------------------------------------------
1. Inherit from `Formatter` (or `TsvFormatter` to tweak single fields).
2. Override `format()` (or `fields()`), which takes a `LogEntry`.
3. Use `encode_context()` / `encode_error()` so the `{}` and fallback rules hold.
4. Pass the result through `single_line()` and end it with exactly one "\\n".
5. Install it with `handler.set_formatter(MyFormatter())`; it applies from the
   next write on.
"""
