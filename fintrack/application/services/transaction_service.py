"""Transaction service - per-user CRUD over the transaction store."""

import dataclasses
from decimal import Decimal
from typing import List
from uuid import uuid4

import structlog

from fintrack.core.metrics import record_transaction_operation
from fintrack.domain.entities import Transaction, TransactionDraft
from fintrack.domain.exceptions import InvalidRequestException, TransactionNotFoundException
from fintrack.domain.interfaces import TransactionRepository
from fintrack.application.dto import TransactionUpdate, validate_draft

logger = structlog.get_logger(__name__)


class TransactionService:
    """
    Application service for transaction use cases.

    The store assigns ids; clients only ever receive them.
    """

    def __init__(self, transaction_repository: TransactionRepository):
        self._transaction_repo = transaction_repository

    async def list_transactions(self, user_id: str) -> List[Transaction]:
        """All of a user's transactions, newest created first."""
        transactions = await self._transaction_repo.list_by_user(user_id)
        logger.info("transactions_listed", user_id=user_id, count=len(transactions))
        return transactions

    async def create_transaction(
        self,
        user_id: str,
        draft: TransactionDraft,
    ) -> Transaction:
        """
        Store a new transaction for a user.

        Raises:
            InvalidRequestException: If the draft fails validation
        """
        errors = validate_draft(draft)
        if errors:
            raise InvalidRequestException("; ".join(errors))

        transaction = await self._transaction_repo.add(
            Transaction(
                id=str(uuid4()),
                user_id=user_id,
                type=draft.type,
                title=draft.title.strip(),
                amount=draft.amount,
                date=draft.date,
                category=draft.category,
                description=draft.description,
            )
        )

        record_transaction_operation("create")
        logger.info(
            "transaction_created",
            user_id=user_id,
            transaction_id=transaction.id,
            type=transaction.type.value,
        )

        return transaction

    async def update_transaction(
        self,
        user_id: str,
        transaction_id: str,
        update: TransactionUpdate,
    ) -> Transaction:
        """
        Apply a partial update to one of the user's transactions.

        Raises:
            InvalidRequestException: If the update fails validation
            TransactionNotFoundException: If the user has no such transaction
        """
        errors = update.validate()
        if errors:
            raise InvalidRequestException("; ".join(errors))

        existing = await self._transaction_repo.get_by_id(transaction_id, user_id)
        if existing is None:
            logger.warning(
                "transaction_not_found",
                user_id=user_id,
                transaction_id=transaction_id,
            )
            raise TransactionNotFoundException(transaction_id)

        changes = dict(update.changes)
        if "amount" in changes:
            changes["amount"] = Decimal(str(changes["amount"]))

        updated = await self._transaction_repo.update(
            dataclasses.replace(existing, **changes)
        )

        record_transaction_operation("update")
        logger.info(
            "transaction_updated",
            user_id=user_id,
            transaction_id=transaction_id,
            fields=sorted(changes),
        )

        return updated

    async def delete_transaction(self, user_id: str, transaction_id: str) -> None:
        """
        Raises:
            TransactionNotFoundException: If the user has no such transaction
        """
        deleted = await self._transaction_repo.delete(transaction_id, user_id)
        if not deleted:
            raise TransactionNotFoundException(transaction_id)

        record_transaction_operation("delete")
        logger.info("transaction_deleted", user_id=user_id, transaction_id=transaction_id)
