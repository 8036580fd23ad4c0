"""Unit tests for database URL handling and the session manager."""

from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

import pytest
from sqlalchemy import select

from fintrack.domain.entities import Transaction, TransactionType, User
from fintrack.infrastructure.database import BudgetModel, DatabaseSessionManager
from fintrack.infrastructure.database.connection import to_async_url
from fintrack.infrastructure.repositories import PostgresTransactionRepository


@pytest.mark.parametrize(
    "url, expected",
    [
        ("postgres://u:p@db/fintrack", "postgresql+asyncpg://u:p@db/fintrack"),
        ("postgresql://u:p@db/fintrack", "postgresql+asyncpg://u:p@db/fintrack"),
        ("postgresql+asyncpg://u:p@db/fintrack", "postgresql+asyncpg://u:p@db/fintrack"),
        ("sqlite:///./dev.db", "sqlite+aiosqlite:///./dev.db"),
    ],
)
def test_to_async_url(url, expected):
    assert to_async_url(url) == expected


@pytest.mark.asyncio
async def test_session_manager_round_trip(tmp_path):
    manager = DatabaseSessionManager()
    manager.init(f"sqlite:///{tmp_path / 'fintrack.db'}")
    await manager.create_tables()

    async with manager.session() as session:
        session.add(
            BudgetModel(user_id=str(uuid4()), category="Food", limit_amount=Decimal("100"))
        )

    async with manager.session() as session:
        result = await session.execute(select(BudgetModel.category))
        assert result.scalars().all() == ["Food"]

    await manager.close()


@pytest.mark.asyncio
async def test_session_requires_init():
    manager = DatabaseSessionManager()

    with pytest.raises(RuntimeError):
        async with manager.session():
            pass


@pytest.mark.asyncio
async def test_new_transactions_get_an_aware_creation_time(tmp_path):
    manager = DatabaseSessionManager()
    manager.init(f"sqlite:///{tmp_path / 'fintrack.db'}")
    await manager.create_tables()

    async with manager.session() as session:
        stored = await PostgresTransactionRepository(session).add(
            Transaction(
                id=str(uuid4()),
                type=TransactionType.EXPENSE,
                title="Groceries",
                amount=Decimal("12.00"),
                date=datetime(2025, 6, 1, tzinfo=timezone.utc),
                category="Food",
                user_id=str(uuid4()),
            )
        )

    assert stored.created_at.tzinfo is not None


def test_new_users_get_an_aware_creation_time():
    user = User(name="Ada", email="ada@example.com", password_hash="x")

    assert user.created_at.tzinfo is not None
