"""Generative AI-related domain exceptions."""

from .base import DomainException


class AIProviderException(DomainException):
    """Raised when the AI provider returns an error status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(
            message=message,
            code="AI_PROVIDER_ERROR",
        )
        self.status_code = status_code


class AIProviderTimeoutException(AIProviderException):
    """Raised when the AI provider times out."""

    def __init__(self):
        super().__init__(
            message="AI provider request timed out",
            status_code=None,
        )
        self.code = "AI_PROVIDER_TIMEOUT"


class AIGenerationException(DomainException):
    """Raised when the provider answers but the content is unusable."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="AI_GENERATION_FAILED",
        )


class AIFeatureException(DomainException):
    """
    Raised by the AI service when a feature request fails.

    Carries the user-facing message for that feature; the underlying
    cause is logged, never returned.
    """

    def __init__(self, feature: str, message: str):
        super().__init__(
            message=message,
            code="AI_REQUEST_FAILED",
        )
        self.feature = feature


class InsufficientDataException(DomainException):
    """Raised when there is not enough history to run an analysis."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INSUFFICIENT_DATA",
        )
