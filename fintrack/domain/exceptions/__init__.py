"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException
from .auth import (
    AuthenticationException,
    InvalidCredentialsException,
    UserAlreadyExistsException,
)
from .transaction import (
    BudgetNotFoundException,
    InvalidRequestException,
    TransactionNotFoundException,
)
from .ai import (
    AIFeatureException,
    AIGenerationException,
    AIProviderException,
    AIProviderTimeoutException,
    InsufficientDataException,
)
from .store import StoreRequestException, StoreUnavailableException

__all__ = [
    "DomainException",
    "AuthenticationException",
    "InvalidCredentialsException",
    "UserAlreadyExistsException",
    "BudgetNotFoundException",
    "InvalidRequestException",
    "TransactionNotFoundException",
    "AIFeatureException",
    "AIGenerationException",
    "AIProviderException",
    "AIProviderTimeoutException",
    "InsufficientDataException",
    "StoreRequestException",
    "StoreUnavailableException",
]
