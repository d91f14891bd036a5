"""
Custom exceptions for the logging subsystem.
"""

# canonical logging-level exception

class LoggingError(Exception):
    """
    Base exception for logger/handler errors.

    - message: human-friendly message (safe to show to operators)
    - error_code: canonical short code (e.g., 'invalid_config', 'write_failed')
    """

    # Map canonical error_code -> status reported to the error-reporting collaborator.
    ERROR_CODE_TO_STATUS = {
        "invalid_config": 500,
        "invalid_processor": 500,
        "invalid_destination": 500,
        "write_failed": 503,
        # fallback: default to 500 for general logging errors
    }

    def __init__(self, message: str, *, error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code

    def __str__(self) -> str:
        if self.error_code:
            return f"{self.message} (code: {self.error_code})"
        return self.message

    def to_payload(self) -> dict:
        """
        Return a JSON-serializable dict describing the error.
        Standard shape:
            {
                "detail": "Log level bogus is not a valid log level. ...",
                "code": "invalid_config",      # optional canonical code
            }
        """
        payload = {"detail": self.message}
        if self.error_code:
            payload["code"] = self.error_code
        return payload

    def status_code(self) -> int:
        """
        Return the status code that accompanies this error when it is handed to an
        error reporter. Unknown or missing codes default to 500.
        """
        if self.error_code:
            return self.ERROR_CODE_TO_STATUS.get(self.error_code, 500)
        return 500


class ConfigurationError(LoggingError):
    """Raised for an invalid severity name or an invalid processor registration."""

    def __init__(self, message: str, *, error_code: str = "invalid_config"):
        super().__init__(message, error_code=error_code)


class InvalidProcessorError(ConfigurationError):
    """Raised when a value registered as a processor is not callable."""

    def __init__(self, message: str):
        super().__init__(message, error_code="invalid_processor")


class DestinationError(LoggingError):
    """Raised when a logging destination cannot be opened or interpreted."""

    def __init__(self, message: str):
        super().__init__(message, error_code="invalid_destination")


class LogWriteError(LoggingError, IOError):
    """
    Raised when writing to an already-open destination fails.

    The entry that could not be written is kept on `entry` so the caller can still
    report it; the underlying OS error is available as `__cause__`.
    """

    def __init__(self, message: str, *, entry=None):
        super().__init__(message, error_code="write_failed")
        self.entry = entry


__all__ = [
    "LoggingError",
    "ConfigurationError",
    "InvalidProcessorError",
    "DestinationError",
    "LogWriteError",
]
