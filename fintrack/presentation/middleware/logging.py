"""Access logging and HTTP metrics."""

import time
from typing import Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from fintrack.core.metrics import record_http_request

logger = structlog.get_logger(__name__)

# Scraped or polled constantly; logged at debug so they do not drown real traffic
_QUIET_PATHS = frozenset({"/health", "/metrics"})


def _route_template(request: Request) -> str:
    """Matched route path, so transaction ids do not become metric labels."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs one line per request and records it in the HTTP metrics.

    The request id is already bound by RequestContextMiddleware, which
    wraps this one.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        started = time.perf_counter()
        path = request.url.path
        log = logger.bind(method=request.method, path=path)
        emit = log.debug if path in _QUIET_PATHS else log.info

        try:
            response = await call_next(request)
        except Exception as e:
            elapsed = time.perf_counter() - started
            record_http_request(request.method, _route_template(request), 500, elapsed)
            log.error(
                "request_failed",
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=round(elapsed * 1000, 2),
            )
            raise

        elapsed = time.perf_counter() - started
        record_http_request(
            request.method, _route_template(request), response.status_code, elapsed
        )
        emit(
            "request_completed",
            status_code=response.status_code,
            duration_ms=round(elapsed * 1000, 2),
        )
        return response
