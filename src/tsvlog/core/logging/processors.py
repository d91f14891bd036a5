# src/tsvlog/core/logging/processors.py
"""
Context processors

A processor is a plain callable `context -> context`. Processors run in
registration order, after the LogEntry is built and before any handler formats
it; each one sees the cumulative output of the ones before it.

    def add_host(context: dict) -> dict:
        context["host"] = socket.gethostname()
        return context

    logger.add_processor(add_host)

Registration is scoped: a ProcessorRegistry maps a scope (a logger's channel)
to its ordered processor list. There is no process-wide registry; each Logger
owns one unless a registry is shared in explicitly.

Built-in processors
-------------------
- request_id_processor: stamps `request_id` from a context variable so log lines
  belonging to the same request/job can be correlated. Uses
  `contextvars.ContextVar` so it is safe across asyncio tasks and awaits.
- redact_processor: masks values of sensitive keys (passwords, tokens, ...).
- make_static_processor(**fields): adds fixed fields such as service or env.
"""

import contextvars
from typing import Any, Callable, Iterable

from tsvlog.exceptions import InvalidProcessorError

from .entry import LogEntry

Processor = Callable[[dict[str, Any]], dict[str, Any]]


class ProcessorRegistry:
    """Ordered processor lists keyed by scope."""

    def __init__(self) -> None:
        self._processors: dict[str, list[Processor]] = {}

    def add(self, scope: str, *processors: Processor) -> str:
        """
        Append `processors` to `scope` and return the scope.

        Validation happens before anything is registered, so a bad value in the
        middle of the argument list leaves the registry unchanged.
        """
        for processor in processors:
            if not callable(processor):
                raise InvalidProcessorError(
                    f"Processor {processor!r} registered for {scope!r} is not callable"
                )
        self._processors.setdefault(scope, []).extend(processors)
        return scope

    def get(self, scope: str) -> tuple[Processor, ...]:
        return tuple(self._processors.get(scope, ()))

    def clear(self, scope: str | None = None) -> None:
        if scope is None:
            self._processors.clear()
        else:
            self._processors.pop(scope, None)

    def __contains__(self, scope: str) -> bool:
        return bool(self._processors.get(scope))


def invoke_processor(processor: Processor, entry: LogEntry) -> None:
    """
    Apply one processor to `entry`.

    Reads the entry's context, hands the processor a copy, and writes the result
    back. This is the only place a LogEntry's context changes after construction.
    """
    updated = processor(dict(entry.context))
    if updated is None:
        # processor mutated its copy in place and forgot to return it
        raise InvalidProcessorError(f"Processor {processor!r} returned None instead of a context")
    entry.context.clear()
    entry.context.update(updated)


def run_processors(processors: Iterable[Processor], entry: LogEntry) -> LogEntry:
    for processor in processors:
        invoke_processor(processor, entry)
    return entry


# -----------------------
# Request id
# -----------------------

# Default is None to indicate "no request id set".
_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)


def set_request_id(request_id: str | None):
    """
    Set the request id in the current context and return the token to allow reset.
    """
    return _request_id_ctx.set(request_id)


def reset_request_id(token) -> None:
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


def request_id_processor(context: dict[str, Any]) -> dict[str, Any]:
    """
    Guarantee every entry carries a `request_id`.

    Order of precedence:
      * a request_id the caller put in the context explicitly
      * the context variable set via set_request_id()
      * the sentinel "-"
    """
    context["request_id"] = context.get("request_id") or get_request_id() or "-"
    return context


# -----------------------
# Redaction
# -----------------------

REDACTED = "***REDACTED***"
SENSITIVE_KEYS = frozenset(
    {"password", "secret", "token", "access_token", "refresh_token", "ssn", "authorization"}
)


def redact_processor(context: dict[str, Any]) -> dict[str, Any]:
    """Mask top-level values whose key (case-insensitive) is sensitive."""
    for key in list(context):
        if isinstance(key, str) and key.lower() in SENSITIVE_KEYS:
            context[key] = REDACTED
    return context


def make_static_processor(**fields: Any) -> Processor:
    """
    Build a processor adding fixed fields (e.g. service="billing", env="prod").

    Keys the caller already supplied win over the static values.
    """

    def static_processor(context: dict[str, Any]) -> dict[str, Any]:
        for key, value in fields.items():
            context.setdefault(key, value)
        return context

    return static_processor
