"""Shared helpers for the client-side HTTP adapters."""

from typing import Any, Callable, TypeVar

import httpx

from fintrack.domain.exceptions import StoreRequestException

T = TypeVar("T")


def error_message(response: httpx.Response, default: str) -> str:
    """
    Extract the server's error message from a failed response.

    Falls back to `default` when the body is not JSON or has no message.
    """
    try:
        data = response.json()
    except ValueError:
        return default
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return default


INVALID_RESPONSE_MESSAGE = "Received an invalid response from the server."


def parse_body(response: httpx.Response, parse: Callable[[Any], T]) -> T:
    """Decode a success body, treating a malformed one as a failed request."""
    try:
        return parse(response.json())
    except (ValueError, KeyError, TypeError, AttributeError, ArithmeticError) as e:
        raise StoreRequestException(
            message=INVALID_RESPONSE_MESSAGE,
            status_code=response.status_code,
        ) from e
