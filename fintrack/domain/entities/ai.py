"""Value objects exchanged with the generative AI provider."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional


@dataclass(frozen=True)
class ChatMessage:
    """One turn of a chat conversation; sender is "user" or "bot"."""

    sender: str
    text: str

    def to_dict(self) -> dict:
        return {"sender": self.sender, "text": self.text}


@dataclass(frozen=True)
class ScannedBill:
    """Fields extracted from a bill or receipt image."""

    title: Optional[str] = None
    amount: Optional[Decimal] = None
    date: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "amount": float(self.amount) if self.amount is not None else None,
            "date": self.date,
            "category": self.category,
            "description": self.description,
        }


@dataclass(frozen=True)
class BudgetCategory:
    category: str
    amount: Decimal
    reason: str = ""

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "amount": float(self.amount),
            "reason": self.reason,
        }


@dataclass(frozen=True)
class BudgetRecommendation:
    """A monthly budget suggested from recent spending."""

    total_budget: Decimal
    categories: List[BudgetCategory] = field(default_factory=list)
    advice: str = ""

    def to_dict(self) -> dict:
        return {
            "total_budget": float(self.total_budget),
            "categories": [c.to_dict() for c in self.categories],
            "advice": self.advice,
        }
