from .base import (
    LoggingError,
    ConfigurationError,
    InvalidProcessorError,
    DestinationError,
    LogWriteError,
)

__all__ = [
    "LoggingError",
    "ConfigurationError",
    "InvalidProcessorError",
    "DestinationError",
    "LogWriteError",
]
