"""
Unit tests for budget alert evaluation.

These tests verify:
1. Warning at 80% of a limit, exceeded once spending passes it
2. Month-to-date window
3. Limit validation on set_budget
"""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from fintrack.application.services import BudgetService
from fintrack.domain.entities import AlertLevel, Budget
from fintrack.domain.exceptions import BudgetNotFoundException, InvalidRequestException


@pytest.fixture
def budget_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.list_by_user.return_value = [
        Budget(user_id="u1", category="Food", limit=Decimal("100")),
        Budget(user_id="u1", category="Rent", limit=Decimal("1000")),
        Budget(user_id="u1", category="Fun", limit=Decimal("50")),
    ]
    return repo


@pytest.fixture
def transaction_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.sum_expenses_by_category.return_value = {
        "Food": Decimal("80"),
        "Rent": Decimal("500"),
        "Fun": Decimal("50.01"),
    }
    return repo


@pytest.fixture
def service(budget_repo, transaction_repo) -> BudgetService:
    return BudgetService(budget_repository=budget_repo, transaction_repository=transaction_repo)


class TestCheckAlerts:

    @pytest.mark.asyncio
    async def test_levels(self, service):
        result = await service.check_alerts("u1")

        levels = {alert.category: alert.level for alert in result.alerts}
        assert levels == {"Food": AlertLevel.WARNING, "Fun": AlertLevel.EXCEEDED}

    @pytest.mark.asyncio
    async def test_spending_exactly_at_limit_is_a_warning(self, service, transaction_repo):
        transaction_repo.sum_expenses_by_category.return_value = {"Fun": Decimal("50")}

        result = await service.check_alerts("u1")

        assert [(a.category, a.level) for a in result.alerts] == [("Fun", AlertLevel.WARNING)]

    @pytest.mark.asyncio
    async def test_sums_from_start_of_month(self, service, transaction_repo):
        now = datetime(2025, 6, 17, 15, 30, tzinfo=timezone.utc)

        await service.check_alerts("u1", now=now)

        transaction_repo.sum_expenses_by_category.assert_awaited_once_with(
            "u1", since=datetime(2025, 6, 1, tzinfo=timezone.utc)
        )

    @pytest.mark.asyncio
    async def test_no_budgets_skips_spending_query(self, service, budget_repo, transaction_repo):
        budget_repo.list_by_user.return_value = []

        result = await service.check_alerts("u1")

        assert result.alerts == []
        transaction_repo.sum_expenses_by_category.assert_not_awaited()


class TestSetBudget:

    @pytest.mark.asyncio
    async def test_non_positive_limit_is_rejected(self, service):
        with pytest.raises(InvalidRequestException):
            await service.set_budget("u1", "Food", Decimal("0"))

    @pytest.mark.asyncio
    async def test_delete_missing_budget_raises(self, service, budget_repo):
        budget_repo.delete.return_value = False

        with pytest.raises(BudgetNotFoundException):
            await service.delete_budget("u1", "Food")
