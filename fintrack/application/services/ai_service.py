"""AI service - forwards bounded transaction windows to the AI provider."""

from typing import Sequence

import structlog

from fintrack.core.metrics import record_ai_request, track_ai_request_latency
from fintrack.domain.entities import (
    BudgetRecommendation,
    ChatMessage,
    ScannedBill,
    TransactionType,
)
from fintrack.domain.exceptions import (
    AIFeatureException,
    InsufficientDataException,
    InvalidRequestException,
)
from fintrack.domain.interfaces import AIProviderClient, TransactionRepository

logger = structlog.get_logger(__name__)

NO_SUMMARY_DATA_MESSAGE = "Not enough data for a summary. Add some transactions first!"
NOT_ENOUGH_BUDGET_DATA_MESSAGE = (
    "Not enough transaction data. Please add at least one income and a few "
    "expense records to generate a budget."
)
BUDGET_AI_TROUBLE_MESSAGE = (
    "Our AI had trouble analyzing your spending patterns. Please try again "
    "after adding more varied transactions."
)
BUDGET_SERVER_ERROR_MESSAGE = "A server error occurred while generating your budget."
BUDGET_GENERATION_MARKER = "Failed to generate budget with AI"


class AIService:
    """
    Application service for the AI-assisted features.

    Each feature reads a fixed window of the user's most recent
    transactions, forwards it to the provider and relays the answer.
    Provider failures are logged and replaced by a per-feature message.
    """

    SUMMARY_WINDOW = 30
    CHAT_WINDOW = 50
    BUDGET_WINDOW = 200

    MIN_INCOME_RECORDS = 1
    MIN_EXPENSE_RECORDS = 5

    def __init__(
        self,
        transaction_repository: TransactionRepository,
        ai_client: AIProviderClient,
    ):
        self._transaction_repo = transaction_repository
        self._ai_client = ai_client

    async def summarize(self, user_id: str) -> str:
        transactions = await self._transaction_repo.list_recent(
            user_id, self.SUMMARY_WINDOW
        )
        if not transactions:
            record_ai_request("summary", "rejected")
            return NO_SUMMARY_DATA_MESSAGE

        try:
            with track_ai_request_latency("summary"):
                summary = await self._ai_client.generate_summary(transactions)
        except Exception as e:
            self._log_failure("summary", user_id, e)
            raise AIFeatureException("summary", "Failed to generate AI summary.") from e

        record_ai_request("summary", "success")
        return summary

    async def scan_bill(self, image_base64: str | None) -> ScannedBill:
        if not image_base64:
            raise InvalidRequestException("No image data provided.")

        try:
            with track_ai_request_latency("scan"):
                scanned = await self._ai_client.analyze_bill(image_base64)
        except Exception as e:
            self._log_failure("scan", None, e)
            raise AIFeatureException("scan", "Failed to analyze the bill with AI.") from e

        record_ai_request("scan", "success")
        return scanned

    async def chat(self, user_id: str, history: Sequence[ChatMessage]) -> str:
        if not history:
            raise InvalidRequestException("No chat history provided.")

        try:
            transactions = await self._transaction_repo.list_recent(
                user_id, self.CHAT_WINDOW
            )
            with track_ai_request_latency("chat"):
                text = await self._ai_client.chat(list(history), transactions)
        except Exception as e:
            self._log_failure("chat", user_id, e)
            raise AIFeatureException(
                "chat", "Failed to get a response from the chatbot."
            ) from e

        record_ai_request("chat", "success")
        return text

    async def recommend_budget(self, user_id: str) -> BudgetRecommendation:
        """
        Ask the provider for a monthly budget.

        Raises:
            InsufficientDataException: With fewer than MIN_INCOME_RECORDS income
                or MIN_EXPENSE_RECORDS expense records in the window
            AIFeatureException: If generation fails
        """
        transactions = await self._transaction_repo.list_recent(
            user_id, self.BUDGET_WINDOW
        )

        income_count = sum(1 for t in transactions if t.type == TransactionType.INCOME)
        expense_count = sum(1 for t in transactions if t.type == TransactionType.EXPENSE)

        if income_count < self.MIN_INCOME_RECORDS or expense_count < self.MIN_EXPENSE_RECORDS:
            record_ai_request("budget", "rejected")
            logger.info(
                "budget_recommendation_rejected",
                user_id=user_id,
                income_count=income_count,
                expense_count=expense_count,
            )
            raise InsufficientDataException(NOT_ENOUGH_BUDGET_DATA_MESSAGE)

        try:
            with track_ai_request_latency("budget"):
                recommendation = await self._ai_client.recommend_budget(transactions)
        except Exception as e:
            self._log_failure("budget", user_id, e)
            # Generation failures are told apart from other errors by message text
            message = (
                BUDGET_AI_TROUBLE_MESSAGE
                if BUDGET_GENERATION_MARKER in str(e)
                else BUDGET_SERVER_ERROR_MESSAGE
            )
            raise AIFeatureException("budget", message) from e

        record_ai_request("budget", "success")
        return recommendation

    def _log_failure(self, feature: str, user_id: str | None, error: Exception) -> None:
        record_ai_request(feature, "failure")
        logger.error(
            "ai_request_failed",
            feature=feature,
            user_id=user_id,
            error=str(error),
            error_type=type(error).__name__,
        )
