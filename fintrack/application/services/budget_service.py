"""Budget service - category limits and month-to-date alert checks."""

from datetime import datetime, timezone
from decimal import Decimal
from typing import List

import structlog

from fintrack.core.metrics import record_budget_alert
from fintrack.domain.entities import AlertLevel, Budget, BudgetAlert
from fintrack.domain.exceptions import BudgetNotFoundException, InvalidRequestException
from fintrack.domain.interfaces import BudgetRepository, TransactionRepository
from fintrack.application.dto import AlertCheckResult

logger = structlog.get_logger(__name__)


class BudgetService:
    """
    Application service for budget use cases.

    A category is flagged once month-to-date spending reaches
    WARNING_THRESHOLD of its limit, and as exceeded once it passes the limit.
    """

    WARNING_THRESHOLD = Decimal("0.8")

    def __init__(
        self,
        budget_repository: BudgetRepository,
        transaction_repository: TransactionRepository,
    ):
        self._budget_repo = budget_repository
        self._transaction_repo = transaction_repository

    async def list_budgets(self, user_id: str) -> List[Budget]:
        return await self._budget_repo.list_by_user(user_id)

    async def set_budget(self, user_id: str, category: str, limit: Decimal) -> Budget:
        """
        Create or replace the monthly limit for a category.

        Raises:
            InvalidRequestException: If the category is blank or the limit not positive
        """
        if not category or not category.strip():
            raise InvalidRequestException("category is required")
        if limit <= 0:
            raise InvalidRequestException("limit must be positive")

        budget = await self._budget_repo.upsert(
            Budget(user_id=user_id, category=category.strip(), limit=limit)
        )
        logger.info("budget_set", user_id=user_id, category=budget.category)
        return budget

    async def delete_budget(self, user_id: str, category: str) -> None:
        if not await self._budget_repo.delete(user_id, category):
            raise BudgetNotFoundException(category)
        logger.info("budget_deleted", user_id=user_id, category=category)

    async def check_alerts(
        self,
        user_id: str,
        now: datetime | None = None,
    ) -> AlertCheckResult:
        """
        Compare this month's spending per category with the user's budgets.

        Args:
            user_id: The user's identifier
            now: Reference time, defaults to the current UTC time

        Returns:
            AlertCheckResult listing every category at or over the warning level
        """
        now = now or datetime.now(timezone.utc)
        month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)

        budgets = await self._budget_repo.list_by_user(user_id)
        if not budgets:
            return AlertCheckResult(alerts=[])

        spent_by_category = await self._transaction_repo.sum_expenses_by_category(
            user_id, since=month_start
        )

        alerts = []
        for budget in budgets:
            spent = spent_by_category.get(budget.category, Decimal("0"))
            if spent > budget.limit:
                level = AlertLevel.EXCEEDED
            elif spent >= budget.limit * self.WARNING_THRESHOLD:
                level = AlertLevel.WARNING
            else:
                continue

            alert = BudgetAlert(
                category=budget.category,
                limit=budget.limit,
                spent=spent,
                level=level,
            )
            alerts.append(alert)

            record_budget_alert(level.value)
            logger.info(
                "budget_alert_raised",
                user_id=user_id,
                category=alert.category,
                level=level.value,
                percent_used=alert.percent_used,
            )

        return AlertCheckResult(alerts=alerts)
