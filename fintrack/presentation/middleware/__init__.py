"""Request id, access logging and exception mapping for the API."""

from .error_handler import error_handler_middleware
from .logging import LoggingMiddleware
from .request_context import REQUEST_ID_HEADER, RequestContextMiddleware, get_request_id

__all__ = [
    "LoggingMiddleware",
    "REQUEST_ID_HEADER",
    "RequestContextMiddleware",
    "error_handler_middleware",
    "get_request_id",
]
