"""Pydantic schemas for API request/response validation."""

from .ai import (
    BudgetRecommendationSchema,
    ChatRequestSchema,
    ChatResponseSchema,
    ScanRequestSchema,
    ScanResponseSchema,
    SummaryResponseSchema,
)
from .auth import AuthResponseSchema, LoginRequestSchema, RegisterRequestSchema
from .budget import AlertCheckResponseSchema, BudgetRequestSchema, BudgetSchema
from .error import ErrorResponseSchema, FieldErrorSchema
from .transaction import (
    TransactionCreateSchema,
    TransactionDeletedSchema,
    TransactionResponseSchema,
    TransactionUpdateSchema,
)

__all__ = [
    "AlertCheckResponseSchema",
    "AuthResponseSchema",
    "BudgetRecommendationSchema",
    "BudgetRequestSchema",
    "BudgetSchema",
    "ChatRequestSchema",
    "ChatResponseSchema",
    "ErrorResponseSchema",
    "FieldErrorSchema",
    "LoginRequestSchema",
    "RegisterRequestSchema",
    "ScanRequestSchema",
    "ScanResponseSchema",
    "SummaryResponseSchema",
    "TransactionCreateSchema",
    "TransactionDeletedSchema",
    "TransactionResponseSchema",
    "TransactionUpdateSchema",
]
