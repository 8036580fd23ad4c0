"""Domain Entities - Core business objects."""

from .ai import BudgetCategory, BudgetRecommendation, ChatMessage, ScannedBill
from .budget import AlertLevel, Budget, BudgetAlert
from .transaction import (
    EDITABLE_FIELDS,
    Transaction,
    TransactionDraft,
    TransactionType,
    format_timestamp,
    parse_amount,
    parse_timestamp,
)
from .user import Credential, User, UserProfile

__all__ = [
    "AlertLevel",
    "Budget",
    "BudgetAlert",
    "BudgetCategory",
    "BudgetRecommendation",
    "ChatMessage",
    "Credential",
    "EDITABLE_FIELDS",
    "ScannedBill",
    "Transaction",
    "TransactionDraft",
    "TransactionType",
    "User",
    "UserProfile",
    "format_timestamp",
    "parse_amount",
    "parse_timestamp",
]
