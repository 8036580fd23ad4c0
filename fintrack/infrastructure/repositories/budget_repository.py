"""PostgreSQL implementation of BudgetRepository."""

from typing import List

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.domain.entities import Budget, parse_amount
from fintrack.domain.interfaces import BudgetRepository
from fintrack.infrastructure.database.models import BudgetModel


class PostgresBudgetRepository(BudgetRepository):
    """PostgreSQL-backed budget repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def upsert(self, budget: Budget) -> Budget:
        """Create the category budget, or replace its limit if it exists."""
        stmt = select(BudgetModel).where(
            BudgetModel.user_id == budget.user_id,
            BudgetModel.category == budget.category,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            model = BudgetModel(
                user_id=budget.user_id,
                category=budget.category,
                limit_amount=budget.limit,
            )
            self._session.add(model)
        else:
            model.limit_amount = budget.limit

        await self._session.flush()

        return self._to_entity(model)

    async def list_by_user(self, user_id: str) -> List[Budget]:
        stmt = (
            select(BudgetModel)
            .where(BudgetModel.user_id == user_id)
            .order_by(BudgetModel.category)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def delete(self, user_id: str, category: str) -> bool:
        stmt = delete(BudgetModel).where(
            BudgetModel.user_id == user_id,
            BudgetModel.category == category,
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    def _to_entity(self, model: BudgetModel) -> Budget:
        return Budget(
            user_id=model.user_id,
            category=model.category,
            limit=parse_amount(model.limit_amount),
        )
