"""Exceptions raised by the notifier components."""


class NotifierError(Exception):
    """Base exception for notifier errors."""

    pass


class PatternCompileError(NotifierError):
    """Raised when an included/excluded region is not a valid regular expression."""

    def __init__(self, message: str, pattern: str | None = None):
        """Initialize pattern compile error.

        Args:
            message: Error message
            pattern: The offending pattern text
        """
        super().__init__(message)
        self.pattern = pattern


class StorageError(NotifierError):
    """Raised when the change-set cursor store cannot be read or written."""

    pass


class ServiceError(NotifierError):
    """Raised when a version-control service call fails."""

    def __init__(self, message: str, status_code: int | None = None):
        """Initialize service error.

        Args:
            message: Error message
            status_code: HTTP status code, if the failure came from a response
        """
        super().__init__(message)
        self.status_code = status_code


class ServiceConnectionError(ServiceError):
    """Raised when connecting or authenticating to the service fails."""

    pass
