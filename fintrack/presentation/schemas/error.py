"""Error body shared by every failing endpoint."""

from typing import List, Optional

from pydantic import BaseModel, Field


class FieldErrorSchema(BaseModel):
    field: str = Field(..., examples=["amount"])
    message: str = Field(..., examples=["Input should be greater than 0"])


class ErrorResponseSchema(BaseModel):
    """
    Clients display `message` verbatim, so it is always human-readable.

    Validation failures add one `details` entry per offending field.
    """

    error: str = Field(..., description="Stable error code", examples=["TRANSACTION_NOT_FOUND"])
    message: str = Field(..., examples=["Transaction not found"])
    details: Optional[List[FieldErrorSchema]] = None
    request_id: Optional[str] = Field(None, description="Echo of X-Request-ID")
