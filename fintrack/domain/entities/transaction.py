"""Transaction entity representing a single income or expense record."""

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional


class TransactionType(str, Enum):
    """Direction of a transaction."""

    INCOME = "Income"
    EXPENSE = "Expense"


# The only fields a client may send on update; id and server metadata never travel.
EDITABLE_FIELDS = ("type", "title", "amount", "date", "category", "description")


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO 8601 timestamp or a plain YYYY-MM-DD date."""
    if isinstance(value, datetime):
        return value
    text = str(value)
    if "T" in text or " " in text:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    return datetime.strptime(text, "%Y-%m-%d").replace(tzinfo=timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Render a timestamp as ISO 8601, marking naive values as UTC."""
    if value.tzinfo is None:
        return value.isoformat() + "Z"
    return value.isoformat().replace("+00:00", "Z")


def parse_amount(value: Any) -> Decimal:
    """Convert a JSON number or numeric string to Decimal without float noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass(frozen=True)
class TransactionDraft:
    """
    A transaction that has not been stored yet.

    Drafts carry every field except the id, which only the store assigns.
    """

    type: TransactionType
    title: str
    amount: Decimal
    date: datetime
    category: str
    description: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to a JSON-ready request body."""
        return {
            "type": self.type.value,
            "title": self.title,
            "amount": float(self.amount),
            "date": format_timestamp(self.date),
            "category": self.category,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TransactionDraft":
        return cls(
            type=TransactionType(data["type"]),
            title=data["title"],
            amount=parse_amount(data["amount"]),
            date=parse_timestamp(data["date"]),
            category=data["category"],
            description=data.get("description"),
        )


@dataclass(frozen=True)
class Transaction:
    """
    Immutable representation of a stored transaction.

    Attributes:
        id: Opaque identifier assigned by the store
        type: Income or Expense
        title: Short label shown in lists
        amount: Positive decimal amount
        date: When the transaction happened
        category: Spending or income category
        description: Optional free text
        user_id: Owning user, only known server-side
        created_at: When the store created the record
    """

    id: str
    type: TransactionType
    title: str
    amount: Decimal
    date: datetime
    category: str
    description: Optional[str] = None
    user_id: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE

    def editable_fields(self) -> dict:
        """Return exactly the fields an update request may carry."""
        return {
            "type": self.type.value,
            "title": self.title,
            "amount": float(self.amount),
            "date": format_timestamp(self.date),
            "category": self.category,
            "description": self.description,
        }

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        data = {"id": self.id, **self.editable_fields()}
        if self.created_at is not None:
            data["createdAt"] = format_timestamp(self.created_at)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Transaction":
        """Build a transaction from a store response; unknown keys are ignored."""
        created_at = data.get("createdAt")
        return cls(
            id=str(data["id"]),
            type=TransactionType(data["type"]),
            title=data["title"],
            amount=parse_amount(data["amount"]),
            date=parse_timestamp(data["date"]),
            category=data["category"],
            description=data.get("description"),
            created_at=parse_timestamp(created_at) if created_at else None,
        )
