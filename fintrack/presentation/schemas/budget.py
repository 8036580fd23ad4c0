"""Budget Pydantic schemas."""

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field


class BudgetRequestSchema(BaseModel):
    """Schema for PUT /api/budgets/{category} request body."""

    limit: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2, examples=[300])


class BudgetSchema(BaseModel):
    category: str
    limit: float


class BudgetAlertSchema(BaseModel):
    category: str
    limit: float
    spent: float
    percent_used: float
    level: Literal["warning", "exceeded"]


class AlertCheckResponseSchema(BaseModel):
    """Schema for POST /api/transactions/check-alerts response."""

    alerts: list[BudgetAlertSchema]
