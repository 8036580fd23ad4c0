"""Transaction-related domain exceptions."""

from .base import DomainException


class TransactionNotFoundException(DomainException):
    """Raised when a transaction does not exist or belongs to another user."""

    def __init__(self, transaction_id: str):
        super().__init__(
            message="Transaction not found",
            code="TRANSACTION_NOT_FOUND",
        )
        self.transaction_id = transaction_id


class InvalidRequestException(DomainException):
    """Raised when a request body is missing required data."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_REQUEST",
        )


class BudgetNotFoundException(DomainException):
    """Raised when no budget exists for a category."""

    def __init__(self, category: str):
        super().__init__(
            message=f"Budget not found: {category}",
            code="BUDGET_NOT_FOUND",
        )
        self.category = category
