"""Shared exceptions for service layer operations."""


class ValidationError(Exception):
    """
    Raised when a request payload breaks a field rule.

    The message names the failing field and is returned to the client as-is,
    e.g. "'rating' must be a number between 0 and 5".
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(Exception):
    """Raised when a bookmark or list id does not exist."""

    def __init__(self, message: str = "Bookmark Not Found") -> None:
        self.message = message
        super().__init__(message)


class StoreError(Exception):
    """
    Raised when the underlying persistence layer fails.

    The original exception is chained via ``raise ... from`` and logged; clients
    only ever see a generic message.
    """

    def __init__(self, message: str = "Store operation failed") -> None:
        super().__init__(message)
