"""AI feature Pydantic schemas."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class SummaryResponseSchema(BaseModel):
    summary: str


class ScanRequestSchema(BaseModel):
    """Schema for POST /api/ai/scan. Image is base64, optionally a data URL."""

    image: Optional[str] = Field(None, description="Base64 encoded bill image")


class ScannedDataSchema(BaseModel):
    title: Optional[str] = None
    amount: Optional[float] = None
    date: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None


class ScanResponseSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    scanned_data: ScannedDataSchema = Field(..., alias="scannedData")


class ChatMessageSchema(BaseModel):
    sender: Literal["user", "bot"] = "user"
    text: str = Field(..., min_length=1)


class ChatRequestSchema(BaseModel):
    """Schema for POST /api/ai/chat; the last message is the user's question."""

    history: Optional[list[ChatMessageSchema]] = None


class ChatResponseSchema(BaseModel):
    text: str


class BudgetCategorySchema(BaseModel):
    category: str
    amount: float
    reason: str = ""


class BudgetRecommendationSchema(BaseModel):
    """Schema for GET /api/ai/recommend-budget response."""

    total_budget: float
    categories: list[BudgetCategorySchema]
    advice: str = ""
