"""
Domain Interfaces (Ports)
"""

from .repositories import (
    AuthTokenRepository,
    BudgetRepository,
    TransactionRepository,
    UserRepository,
)
from .clients import AIProviderClient, TransactionStoreClient

__all__ = [
    "AuthTokenRepository",
    "BudgetRepository",
    "TransactionRepository",
    "UserRepository",
    "AIProviderClient",
    "TransactionStoreClient",
]
