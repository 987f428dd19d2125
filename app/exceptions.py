"""
Backend server - Custom Exceptions

Exception hierarchy for configuration and startup failures. A failed
database connect is NOT an exception by default: the connector logs it and
the server keeps running. `DatabaseUnavailableError` only surfaces when the
deployment explicitly requires the database at startup.
"""


class BackendError(Exception):
    """
    Base exception for all backend server errors.

    Allows callers to catch every error raised by this package with a
    single handler.
    """

    pass


class ConfigError(BackendError):
    """Raised when configuration cannot be loaded or validated."""

    pass


class DatabaseUnavailableError(BackendError):
    """
    Raised when startup requires the database and the connect attempt failed.

    Attributes:
        uri: Connection string that was attempted (credentials redacted)
        cause: Underlying driver error, if any

    Example:
        >>> raise DatabaseUnavailableError(
        ...     message="Database required but unreachable",
        ...     uri="mongodb://db.internal:27017",
        ... )
    """

    def __init__(self, message: str, uri: str, cause: Exception | None = None):
        """
        Initialize DatabaseUnavailableError.

        Args:
            message: Human-readable error message
            uri: Redacted connection string
            cause: Driver exception that caused the failure
        """
        super().__init__(message)
        self.uri = uri
        self.cause = cause


__all__ = ["BackendError", "ConfigError", "DatabaseUnavailableError"]
