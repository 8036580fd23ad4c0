"""Error handling middleware and exception handlers."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import structlog

from fintrack.domain.exceptions import (
    DomainException,
    AIFeatureException,
    AIProviderException,
    AIProviderTimeoutException,
    AuthenticationException,
    BudgetNotFoundException,
    InsufficientDataException,
    InvalidCredentialsException,
    InvalidRequestException,
    TransactionNotFoundException,
    UserAlreadyExistsException,
)
from .request_context import get_request_id

logger = structlog.get_logger(__name__)

VALIDATION_FAILED_MESSAGE = "Validation failed"


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": code,
            "message": message,
            "request_id": get_request_id(),
        },
    )


def error_handler_middleware(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Maps domain exceptions to appropriate HTTP responses. Every error
    body carries a human-readable "message" that clients show as-is.
    """

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle request body/query validation errors."""
        errors = [
            {
                "field": ".".join(str(part) for part in err.get("loc", ())[1:]),
                "message": err.get("msg", ""),
            }
            for err in exc.errors()
        ]
        logger.info(
            "request_validation_failed",
            request_id=get_request_id(),
            errors=errors,
        )
        return JSONResponse(
            status_code=400,
            content={
                "error": "VALIDATION_ERROR",
                "message": VALIDATION_FAILED_MESSAGE,
                "details": errors,
                "request_id": get_request_id(),
            },
        )

    @app.exception_handler(TransactionNotFoundException)
    async def transaction_not_found_handler(
        request: Request,
        exc: TransactionNotFoundException,
    ) -> JSONResponse:
        """Handle transaction not found errors."""
        return _error_response(404, exc.code, exc.message)

    @app.exception_handler(BudgetNotFoundException)
    async def budget_not_found_handler(
        request: Request,
        exc: BudgetNotFoundException,
    ) -> JSONResponse:
        return _error_response(404, exc.code, exc.message)

    @app.exception_handler(AuthenticationException)
    async def authentication_handler(
        request: Request,
        exc: AuthenticationException,
    ) -> JSONResponse:
        """Handle missing or invalid bearer tokens."""
        response = _error_response(401, exc.code, exc.message)
        response.headers["WWW-Authenticate"] = "Bearer"
        return response

    @app.exception_handler(InvalidCredentialsException)
    async def invalid_credentials_handler(
        request: Request,
        exc: InvalidCredentialsException,
    ) -> JSONResponse:
        return _error_response(401, exc.code, exc.message)

    @app.exception_handler(UserAlreadyExistsException)
    async def user_exists_handler(
        request: Request,
        exc: UserAlreadyExistsException,
    ) -> JSONResponse:
        return _error_response(409, exc.code, exc.message)

    @app.exception_handler(InvalidRequestException)
    async def invalid_request_handler(
        request: Request,
        exc: InvalidRequestException,
    ) -> JSONResponse:
        """Handle invalid request errors."""
        return _error_response(400, exc.code, exc.message)

    @app.exception_handler(InsufficientDataException)
    async def insufficient_data_handler(
        request: Request,
        exc: InsufficientDataException,
    ) -> JSONResponse:
        """Handle analyses requested without enough history."""
        return _error_response(400, exc.code, exc.message)

    @app.exception_handler(AIFeatureException)
    async def ai_feature_handler(
        request: Request,
        exc: AIFeatureException,
    ) -> JSONResponse:
        """Handle failed AI feature requests; the cause was logged by the service."""
        return _error_response(500, exc.code, exc.message)

    @app.exception_handler(AIProviderTimeoutException)
    async def ai_timeout_handler(
        request: Request,
        exc: AIProviderTimeoutException,
    ) -> JSONResponse:
        """Handle AI provider timeouts."""
        logger.error(
            "ai_provider_timeout",
            request_id=get_request_id(),
        )
        return _error_response(
            503, exc.code, "Service temporarily unavailable. Please try again."
        )

    @app.exception_handler(AIProviderException)
    async def ai_provider_handler(
        request: Request,
        exc: AIProviderException,
    ) -> JSONResponse:
        """Handle AI provider errors."""
        logger.error(
            "ai_provider_error",
            request_id=get_request_id(),
            message=exc.message,
            status_code=exc.status_code,
        )
        return _error_response(
            502, exc.code, "Unable to process request. Please try again later."
        )

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle generic domain exceptions."""
        logger.warning(
            "domain_exception",
            request_id=get_request_id(),
            code=exc.code,
            message=exc.message,
        )
        return _error_response(400, exc.code, exc.message)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unhandled_exception",
            request_id=get_request_id(),
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return _error_response(500, "INTERNAL_ERROR", "An unexpected error occurred.")
