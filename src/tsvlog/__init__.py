"""
tsvlog: structured, tab-separated application logging.

    from tsvlog import FileLogger

    logger = FileLogger("app", "orders", level="info")
    logger.info("user created", {"id": 42})
"""

from .core.logging import *  # noqa: F401,F403
from .core.logging import __all__ as _logging_all
from .exceptions import (
    LoggingError,
    ConfigurationError,
    InvalidProcessorError,
    DestinationError,
    LogWriteError,
)

__version__ = "0.1.0"

__all__ = [
    *_logging_all,
    "LoggingError",
    "ConfigurationError",
    "InvalidProcessorError",
    "DestinationError",
    "LogWriteError",
]
