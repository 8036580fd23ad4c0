"""Budget limits and the alerts raised against them."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class AlertLevel(str, Enum):
    WARNING = "warning"
    EXCEEDED = "exceeded"


@dataclass
class Budget:
    """Monthly spending limit for one category."""

    user_id: str
    category: str
    limit: Decimal

    def to_dict(self) -> dict:
        return {"category": self.category, "limit": float(self.limit)}


@dataclass(frozen=True)
class BudgetAlert:
    """Raised when month-to-date spending approaches or passes a limit."""

    category: str
    limit: Decimal
    spent: Decimal
    level: AlertLevel

    @property
    def percent_used(self) -> float:
        if self.limit <= 0:
            return 100.0
        return round(float(self.spent / self.limit * 100), 1)

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "limit": float(self.limit),
            "spent": float(self.spent),
            "percent_used": self.percent_used,
            "level": self.level.value,
        }
