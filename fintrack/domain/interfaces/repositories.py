"""Repository interfaces for data persistence."""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from fintrack.domain.entities import Budget, Transaction, User


class UserRepository(ABC):
    """Abstract repository for registered accounts."""

    @abstractmethod
    async def save(self, user: User) -> User:
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Retrieve a user by email address.

        Args:
            email: Address as entered; implementations compare case-insensitively

        Returns:
            The user if found, None otherwise
        """
        ...

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        ...


class AuthTokenRepository(ABC):
    """Abstract repository for issued bearer tokens."""

    @abstractmethod
    async def save(self, token: str, user_id: str) -> None:
        ...

    @abstractmethod
    async def get_user_id(self, token: str) -> Optional[str]:
        """
        Resolve a bearer token to its user.

        Returns:
            The owning user's id, or None for unknown or revoked tokens
        """
        ...

    @abstractmethod
    async def revoke(self, token: str) -> None:
        ...


class TransactionRepository(ABC):
    """
    Abstract repository for Transaction persistence.

    Every read and write is scoped to a user id; a record owned by someone
    else behaves as if it did not exist.
    """

    @abstractmethod
    async def add(self, transaction: Transaction) -> Transaction:
        """
        Persist a new transaction.

        Args:
            transaction: The transaction to save, id already assigned

        Returns:
            The saved transaction with created_at populated
        """
        ...

    @abstractmethod
    async def get_by_id(
        self,
        transaction_id: str,
        user_id: str,
    ) -> Optional[Transaction]:
        ...

    @abstractmethod
    async def list_by_user(self, user_id: str) -> List[Transaction]:
        """
        Retrieve all transactions for a user.

        Returns:
            Transactions ordered by created_at descending
        """
        ...

    @abstractmethod
    async def list_recent(self, user_id: str, limit: int) -> List[Transaction]:
        """
        Retrieve the most recent transactions by transaction date.

        Args:
            user_id: The user's identifier
            limit: Maximum number of transactions to return

        Returns:
            Transactions ordered by date descending
        """
        ...

    @abstractmethod
    async def update(self, transaction: Transaction) -> Transaction:
        ...

    @abstractmethod
    async def delete(self, transaction_id: str, user_id: str) -> bool:
        """
        Delete a transaction.

        Returns:
            True if a record was removed
        """
        ...

    @abstractmethod
    async def sum_expenses_by_category(
        self,
        user_id: str,
        since: datetime,
    ) -> Dict[str, Decimal]:
        """Total expense amount per category for transactions dated on or after `since`."""
        ...


class BudgetRepository(ABC):
    """Abstract repository for per-category monthly budgets."""

    @abstractmethod
    async def upsert(self, budget: Budget) -> Budget:
        ...

    @abstractmethod
    async def list_by_user(self, user_id: str) -> List[Budget]:
        ...

    @abstractmethod
    async def delete(self, user_id: str, category: str) -> bool:
        ...
