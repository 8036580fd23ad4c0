"""Data Transfer Objects for application layer."""

from .auth import AuthResult, RegisterRequest
from .transaction import AlertCheckResult, TransactionUpdate, validate_draft

__all__ = [
    "AlertCheckResult",
    "AuthResult",
    "RegisterRequest",
    "TransactionUpdate",
    "validate_draft",
]
