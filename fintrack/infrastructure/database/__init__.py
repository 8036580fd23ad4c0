"""Database infrastructure."""

from .connection import get_db_session, DatabaseSessionManager, db_manager
from .models import AuthTokenModel, Base, BudgetModel, TransactionModel, UserModel

__all__ = [
    "get_db_session",
    "DatabaseSessionManager",
    "db_manager",
    "Base",
    "AuthTokenModel",
    "BudgetModel",
    "TransactionModel",
    "UserModel",
]
