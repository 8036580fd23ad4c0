"""Data transfer objects for transaction and budget operations."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List

from fintrack.domain.entities import (
    EDITABLE_FIELDS,
    BudgetAlert,
    TransactionDraft,
    TransactionType,
)

# Every editable field except description must keep a value.
REQUIRED_FIELDS = ("type", "title", "amount", "date", "category")


def validate_draft(draft: TransactionDraft) -> List[str]:
    """Business checks shared by create and update."""
    errors = []

    if not draft.title or not draft.title.strip():
        errors.append("title is required")

    if draft.amount <= 0:
        errors.append("amount must be positive")

    if not draft.category or not draft.category.strip():
        errors.append("category is required")

    return errors


@dataclass(frozen=True)
class TransactionUpdate:
    """
    Partial update of a transaction's editable fields.

    Only keys present in `changes` are written; anything outside the
    editable fields is rejected by validate().
    """

    changes: Dict[str, Any] = field(default_factory=dict)

    def validate(self) -> List[str]:
        errors = []

        unknown = sorted(set(self.changes) - set(EDITABLE_FIELDS))
        if unknown:
            errors.append(f"fields cannot be updated: {', '.join(unknown)}")

        for name in REQUIRED_FIELDS:
            if name in self.changes and self.changes[name] is None:
                errors.append(f"{name} is required")

        title = self.changes.get("title")
        if title is not None and not title.strip():
            errors.append("title is required")

        amount = self.changes.get("amount")
        if amount is not None and Decimal(str(amount)) <= 0:
            errors.append("amount must be positive")

        kind = self.changes.get("type")
        if kind is not None and not isinstance(kind, TransactionType):
            errors.append("type must be Income or Expense")

        return errors


@dataclass(frozen=True)
class AlertCheckResult:
    """Budget alerts raised for the current month."""

    alerts: List[BudgetAlert]

    def to_dict(self) -> dict:
        return {"alerts": [alert.to_dict() for alert in self.alerts]}
