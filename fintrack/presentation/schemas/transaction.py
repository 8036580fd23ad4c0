"""Transaction-related Pydantic schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from fintrack.domain.entities import TransactionType


class TransactionCreateSchema(BaseModel):
    """Schema for POST /api/transactions request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "type": "Expense",
                    "title": "Groceries",
                    "amount": 42.5,
                    "date": "2025-06-01T00:00:00Z",
                    "category": "Food",
                    "description": "Weekly shop",
                }
            ]
        }
    )

    type: TransactionType = Field(..., description="Income or Expense")
    title: str = Field(..., min_length=1, max_length=255, examples=["Groceries"])
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2, examples=[42.5])
    date: datetime = Field(..., description="When the transaction happened")
    category: str = Field(..., min_length=1, max_length=100, examples=["Food"])
    description: Optional[str] = Field(None, max_length=2000)


class TransactionUpdateSchema(BaseModel):
    """
    Schema for PUT /api/transactions/{id} request body.

    Every field is optional; only the ones sent are changed.
    """

    type: Optional[TransactionType] = None
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    date: Optional[datetime] = None
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=2000)


class TransactionResponseSchema(BaseModel):
    """Schema for a stored transaction."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Store-assigned identifier")
    type: TransactionType
    title: str
    amount: float
    date: datetime
    category: str
    description: Optional[str] = None
    created_at: Optional[datetime] = Field(None, alias="createdAt")


class TransactionDeletedSchema(BaseModel):
    message: str = "Transaction removed"
    id: str
