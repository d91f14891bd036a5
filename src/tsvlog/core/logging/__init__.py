# src/tsvlog/core/logging/
# ├─ __init__.py            # public API
# ├─ levels.py              # Severity, parse_level(), should_log()
# ├─ entry.py               # LogEntry, ErrorRecord, extract_error()
# ├─ formatters.py          # TsvFormatter (reference), JsonFormatter, ColorFormatter
# ├─ processors.py          # ProcessorRegistry, request id / redaction processors
# ├─ locking.py             # exclusive advisory lock around each write
# ├─ handlers.py            # Handler base, StreamHandler, EchoHandler
# ├─ paths.py               # dated log file names, storage-path resolution
# ├─ logger.py              # Logger façade, FileLogger
# └─ builder.py             # make_logger(settings) + setup_logging(settings)


from .levels import Severity, parse_level, should_log
from .entry import LogEntry, ErrorRecord, extract_error
from .formatters import Formatter, TsvFormatter, JsonFormatter, ColorFormatter
from .processors import (
    ProcessorRegistry,
    request_id_processor,
    redact_processor,
    make_static_processor,
    set_request_id,
    get_request_id,
    reset_request_id,
)
from .handlers import Handler, StreamHandler, EchoHandler
from .logger import Logger, FileLogger
from .builder import setup_logging, make_logger, get_logger, shutdown_logging

__all__ = [
    "Severity", "parse_level", "should_log",
    "LogEntry", "ErrorRecord", "extract_error",
    "Formatter", "TsvFormatter", "JsonFormatter", "ColorFormatter",
    "ProcessorRegistry", "request_id_processor", "redact_processor", "make_static_processor",
    "set_request_id", "get_request_id", "reset_request_id",
    "Handler", "StreamHandler", "EchoHandler",
    "Logger", "FileLogger",
    "setup_logging", "make_logger", "get_logger", "shutdown_logging",
]
