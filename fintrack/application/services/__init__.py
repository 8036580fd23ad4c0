"""Application services (use cases)."""

from .ai_service import AIService
from .auth_service import AuthService
from .budget_service import BudgetService
from .transaction_service import TransactionService

__all__ = [
    "AIService",
    "AuthService",
    "BudgetService",
    "TransactionService",
]
