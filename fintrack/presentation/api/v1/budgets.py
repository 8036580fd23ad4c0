"""Budget limit endpoints."""

from typing import Annotated, List

from fastapi import APIRouter, Depends, Path, Response

from fintrack.application.services import BudgetService
from fintrack.core.dependencies import get_budget_service, get_current_user
from fintrack.domain.entities import User
from fintrack.presentation.schemas import (
    BudgetRequestSchema,
    BudgetSchema,
    ErrorResponseSchema,
)

budget_router = APIRouter(
    prefix="/budgets",
    responses={
        401: {"model": ErrorResponseSchema, "description": "Missing or invalid token"},
    },
)


@budget_router.get(
    "",
    response_model=List[BudgetSchema],
    summary="List Budgets",
)
async def list_budgets(
    user: Annotated[User, Depends(get_current_user)],
    service: Annotated[BudgetService, Depends(get_budget_service)],
) -> List[BudgetSchema]:
    budgets = await service.list_budgets(user.id)
    return [BudgetSchema(**b.to_dict()) for b in budgets]


@budget_router.put(
    "/{category}",
    response_model=BudgetSchema,
    summary="Set Category Budget",
    description="Create or replace the monthly limit for a category.",
)
async def set_budget(
    category: Annotated[str, Path(min_length=1, max_length=100)],
    request: BudgetRequestSchema,
    user: Annotated[User, Depends(get_current_user)],
    service: Annotated[BudgetService, Depends(get_budget_service)],
) -> BudgetSchema:
    budget = await service.set_budget(user.id, category, request.limit)
    return BudgetSchema(**budget.to_dict())


@budget_router.delete(
    "/{category}",
    status_code=204,
    summary="Delete Category Budget",
    responses={
        404: {"model": ErrorResponseSchema, "description": "Budget not found"},
    },
)
async def delete_budget(
    category: Annotated[str, Path(min_length=1, max_length=100)],
    user: Annotated[User, Depends(get_current_user)],
    service: Annotated[BudgetService, Depends(get_budget_service)],
) -> Response:
    await service.delete_budget(user.id, category)
    return Response(status_code=204)
