"""Repository implementations."""

from .budget_repository import PostgresBudgetRepository
from .transaction_repository import PostgresTransactionRepository
from .user_repository import PostgresAuthTokenRepository, PostgresUserRepository

__all__ = [
    "PostgresAuthTokenRepository",
    "PostgresBudgetRepository",
    "PostgresTransactionRepository",
    "PostgresUserRepository",
]
