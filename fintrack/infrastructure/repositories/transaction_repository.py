"""PostgreSQL implementation of TransactionRepository."""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.domain.entities import Transaction, TransactionType, parse_amount
from fintrack.domain.interfaces import TransactionRepository
from fintrack.infrastructure.database.models import TransactionModel


class PostgresTransactionRepository(TransactionRepository):
    """
    PostgreSQL implementation of the Transaction repository.

    Uses SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def add(self, transaction: Transaction) -> Transaction:
        """Persist a transaction to the database."""
        model = TransactionModel(
            id=transaction.id,
            user_id=transaction.user_id,
            type=transaction.type.value,
            title=transaction.title,
            amount=transaction.amount,
            date=transaction.date,
            category=transaction.category,
            description=transaction.description,
            created_at=transaction.created_at or datetime.now(timezone.utc),
        )

        self._session.add(model)
        await self._session.flush()

        return self._to_entity(model)

    async def get_by_id(
        self,
        transaction_id: str,
        user_id: str,
    ) -> Optional[Transaction]:
        model = await self._get_model(transaction_id, user_id)
        if model is None:
            return None
        return self._to_entity(model)

    async def list_by_user(self, user_id: str) -> List[Transaction]:
        """Retrieve a user's transactions, newest created first."""
        stmt = (
            select(TransactionModel)
            .where(TransactionModel.user_id == user_id)
            .order_by(TransactionModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def list_recent(self, user_id: str, limit: int) -> List[Transaction]:
        """Retrieve a user's latest transactions by transaction date."""
        stmt = (
            select(TransactionModel)
            .where(TransactionModel.user_id == user_id)
            .order_by(TransactionModel.date.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def update(self, transaction: Transaction) -> Transaction:
        """Overwrite the editable fields of an existing transaction."""
        model = await self._get_model(transaction.id, transaction.user_id)

        if model is None:
            raise ValueError(f"Transaction {transaction.id} not found")

        model.type = transaction.type.value
        model.title = transaction.title
        model.amount = transaction.amount
        model.date = transaction.date
        model.category = transaction.category
        model.description = transaction.description

        await self._session.flush()

        return self._to_entity(model)

    async def delete(self, transaction_id: str, user_id: str) -> bool:
        stmt = delete(TransactionModel).where(
            TransactionModel.id == transaction_id,
            TransactionModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def sum_expenses_by_category(
        self,
        user_id: str,
        since: datetime,
    ) -> Dict[str, Decimal]:
        stmt = (
            select(TransactionModel.category, func.sum(TransactionModel.amount))
            .where(
                TransactionModel.user_id == user_id,
                TransactionModel.type == TransactionType.EXPENSE.value,
                TransactionModel.date >= since,
            )
            .group_by(TransactionModel.category)
        )
        result = await self._session.execute(stmt)
        return {
            category: parse_amount(total or 0)
            for category, total in result.all()
        }

    async def _get_model(
        self,
        transaction_id: str,
        user_id: str | None,
    ) -> Optional[TransactionModel]:
        stmt = select(TransactionModel).where(
            TransactionModel.id == transaction_id,
            TransactionModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _to_entity(self, model: TransactionModel) -> Transaction:
        """Convert database model to domain entity."""
        return Transaction(
            id=model.id,
            user_id=model.user_id,
            type=TransactionType(model.type),
            title=model.title,
            amount=parse_amount(model.amount),
            date=model.date,
            category=model.category,
            description=model.description,
            created_at=model.created_at,
        )
