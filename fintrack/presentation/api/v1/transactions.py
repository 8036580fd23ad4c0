"""Transaction store API endpoints."""

from typing import Annotated, List

from fastapi import APIRouter, Depends, Path

from fintrack.application.dto import TransactionUpdate
from fintrack.application.services import BudgetService, TransactionService
from fintrack.core.dependencies import (
    get_budget_service,
    get_current_user,
    get_transaction_service,
)
from fintrack.domain.entities import Transaction, TransactionDraft, User
from fintrack.presentation.schemas import (
    AlertCheckResponseSchema,
    ErrorResponseSchema,
    TransactionCreateSchema,
    TransactionDeletedSchema,
    TransactionResponseSchema,
    TransactionUpdateSchema,
)

transaction_router = APIRouter(
    prefix="/transactions",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        401: {"model": ErrorResponseSchema, "description": "Missing or invalid token"},
    },
)


def _to_schema(transaction: Transaction) -> TransactionResponseSchema:
    return TransactionResponseSchema(
        id=transaction.id,
        type=transaction.type,
        title=transaction.title,
        amount=float(transaction.amount),
        date=transaction.date,
        category=transaction.category,
        description=transaction.description,
        created_at=transaction.created_at,
    )


@transaction_router.get(
    "",
    response_model=List[TransactionResponseSchema],
    summary="List Transactions",
    description="Return every transaction of the authenticated user, newest first.",
)
async def list_transactions(
    user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TransactionService, Depends(get_transaction_service)],
) -> List[TransactionResponseSchema]:
    transactions = await service.list_transactions(user.id)
    return [_to_schema(t) for t in transactions]


@transaction_router.post(
    "",
    response_model=TransactionResponseSchema,
    status_code=201,
    summary="Create Transaction",
    description="Store a transaction. The response carries the assigned id.",
)
async def create_transaction(
    request: TransactionCreateSchema,
    user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TransactionService, Depends(get_transaction_service)],
) -> TransactionResponseSchema:
    draft = TransactionDraft(
        type=request.type,
        title=request.title,
        amount=request.amount,
        date=request.date,
        category=request.category,
        description=request.description,
    )
    transaction = await service.create_transaction(user.id, draft)
    return _to_schema(transaction)


@transaction_router.post(
    "/check-alerts",
    response_model=AlertCheckResponseSchema,
    summary="Check Budget Alerts",
    description="""
    Compare this month's expenses per category with the user's budgets.

    Clients call this after adding a transaction and do not wait on it.
    """,
)
async def check_alerts(
    user: Annotated[User, Depends(get_current_user)],
    service: Annotated[BudgetService, Depends(get_budget_service)],
) -> AlertCheckResponseSchema:
    result = await service.check_alerts(user.id)
    return AlertCheckResponseSchema(**result.to_dict())


@transaction_router.put(
    "/{transaction_id}",
    response_model=TransactionResponseSchema,
    summary="Update Transaction",
    responses={
        404: {"model": ErrorResponseSchema, "description": "Transaction not found"},
    },
)
async def update_transaction(
    transaction_id: Annotated[str, Path(description="Id of the transaction")],
    request: TransactionUpdateSchema,
    user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TransactionService, Depends(get_transaction_service)],
) -> TransactionResponseSchema:
    update = TransactionUpdate(changes=request.model_dump(exclude_unset=True))
    transaction = await service.update_transaction(user.id, transaction_id, update)
    return _to_schema(transaction)


@transaction_router.delete(
    "/{transaction_id}",
    response_model=TransactionDeletedSchema,
    summary="Delete Transaction",
    responses={
        404: {"model": ErrorResponseSchema, "description": "Transaction not found"},
    },
)
async def delete_transaction(
    transaction_id: Annotated[str, Path(description="Id of the transaction")],
    user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TransactionService, Depends(get_transaction_service)],
) -> TransactionDeletedSchema:
    await service.delete_transaction(user.id, transaction_id)
    return TransactionDeletedSchema(id=transaction_id)
