"""Exceptions raised by the client-side transaction store and auth clients."""

from .base import DomainException


class StoreRequestException(DomainException):
    """Raised when the remote store answers with a non-success status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(
            message=message,
            code="STORE_REQUEST_FAILED",
        )
        self.status_code = status_code


class StoreUnavailableException(StoreRequestException):
    """Raised when the remote store cannot be reached at all."""

    def __init__(self, message: str = "Could not connect to the server."):
        super().__init__(message=message, status_code=None)
        self.code = "STORE_UNAVAILABLE"
