"""AI proxy endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from fintrack.application.services import AIService
from fintrack.core.dependencies import get_ai_service, get_current_user
from fintrack.domain.entities import ChatMessage, User
from fintrack.presentation.schemas import (
    BudgetRecommendationSchema,
    ChatRequestSchema,
    ChatResponseSchema,
    ErrorResponseSchema,
    ScanRequestSchema,
    ScanResponseSchema,
    SummaryResponseSchema,
)

ai_router = APIRouter(
    prefix="/ai",
    responses={
        401: {"model": ErrorResponseSchema, "description": "Missing or invalid token"},
        500: {"model": ErrorResponseSchema, "description": "AI request failed"},
    },
)


@ai_router.get(
    "/summary",
    response_model=SummaryResponseSchema,
    summary="AI Financial Summary",
    description="Summarize the user's 30 most recent transactions.",
)
async def get_summary(
    user: Annotated[User, Depends(get_current_user)],
    ai_service: Annotated[AIService, Depends(get_ai_service)],
) -> SummaryResponseSchema:
    summary = await ai_service.summarize(user.id)
    return SummaryResponseSchema(summary=summary)


@ai_router.post(
    "/scan",
    response_model=ScanResponseSchema,
    summary="Scan Bill",
    description="Extract transaction fields from a base64 bill image.",
    responses={
        400: {"model": ErrorResponseSchema, "description": "No image provided"},
    },
)
async def scan_bill(
    request: ScanRequestSchema,
    user: Annotated[User, Depends(get_current_user)],
    ai_service: Annotated[AIService, Depends(get_ai_service)],
) -> ScanResponseSchema:
    scanned = await ai_service.scan_bill(request.image)
    return ScanResponseSchema(scanned_data=scanned.to_dict())


@ai_router.post(
    "/chat",
    response_model=ChatResponseSchema,
    summary="Financial Chatbot",
    description="Answer the latest message using the user's 50 most recent transactions.",
    responses={
        400: {"model": ErrorResponseSchema, "description": "No chat history provided"},
    },
)
async def chat(
    request: ChatRequestSchema,
    user: Annotated[User, Depends(get_current_user)],
    ai_service: Annotated[AIService, Depends(get_ai_service)],
) -> ChatResponseSchema:
    history = [
        ChatMessage(sender=message.sender, text=message.text)
        for message in request.history or []
    ]
    text = await ai_service.chat(user.id, history)
    return ChatResponseSchema(text=text)


@ai_router.get(
    "/recommend-budget",
    response_model=BudgetRecommendationSchema,
    summary="Recommend Budget",
    description="""
    Suggest a monthly budget from the last 200 transactions.

    Requires at least one income and five expense records.
    """,
    responses={
        400: {"model": ErrorResponseSchema, "description": "Not enough transaction data"},
    },
)
async def recommend_budget(
    user: Annotated[User, Depends(get_current_user)],
    ai_service: Annotated[AIService, Depends(get_ai_service)],
) -> BudgetRecommendationSchema:
    recommendation = await ai_service.recommend_budget(user.id)
    return BudgetRecommendationSchema(**recommendation.to_dict())
