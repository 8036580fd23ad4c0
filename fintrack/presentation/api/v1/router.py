from fastapi import APIRouter

from .ai import ai_router
from .auth import auth_router
from .budgets import budget_router
from .transactions import transaction_router

router = APIRouter()

router.include_router(auth_router, tags=["Auth"])
router.include_router(transaction_router, tags=["Transactions"])
router.include_router(budget_router, tags=["Budgets"])
router.include_router(ai_router, tags=["AI"])
