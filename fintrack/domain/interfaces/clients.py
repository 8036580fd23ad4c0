"""External client interfaces."""

from abc import ABC, abstractmethod
from typing import List, Sequence

from fintrack.domain.entities import (
    BudgetRecommendation,
    ChatMessage,
    Credential,
    ScannedBill,
    Transaction,
    TransactionDraft,
)


class AIProviderClient(ABC):
    """
    Abstract client for the generative AI provider.

    The backend forwards bounded windows of a user's transactions and
    relays the provider's answer.
    """

    @abstractmethod
    async def generate_summary(self, transactions: Sequence[Transaction]) -> str:
        """
        Summarize recent spending in a few sentences.

        Raises:
            AIProviderException: If the provider returns an error
            AIGenerationException: If the provider returns no usable text
        """
        ...

    @abstractmethod
    async def analyze_bill(self, image_base64: str) -> ScannedBill:
        """
        Extract transaction fields from a bill image.

        Args:
            image_base64: Base64 image data, optionally as a data URL
        """
        ...

    @abstractmethod
    async def chat(
        self,
        history: Sequence[ChatMessage],
        transactions: Sequence[Transaction],
    ) -> str:
        ...

    @abstractmethod
    async def recommend_budget(
        self,
        transactions: Sequence[Transaction],
    ) -> BudgetRecommendation:
        """
        Suggest a monthly budget.

        Raises:
            AIGenerationException: With a message starting "Failed to generate
                budget with AI" when the answer cannot be parsed
        """
        ...


class TransactionStoreClient(ABC):
    """
    Abstract client for the remote transaction store.

    Every call is authorized by the credential passed in; the store is the
    single source of truth and assigns all ids.
    """

    @abstractmethod
    async def list_transactions(self, credential: Credential) -> List[Transaction]:
        """
        Fetch every transaction of the session's user, in store order.

        Raises:
            StoreRequestException: On a non-success status
            StoreUnavailableException: If the store cannot be reached
        """
        ...

    @abstractmethod
    async def create_transaction(
        self,
        credential: Credential,
        draft: TransactionDraft,
    ) -> Transaction:
        ...

    @abstractmethod
    async def update_transaction(
        self,
        credential: Credential,
        transaction: Transaction,
    ) -> Transaction:
        """Send the editable fields of `transaction` and return the stored copy."""
        ...

    @abstractmethod
    async def delete_transaction(
        self,
        credential: Credential,
        transaction_id: str,
    ) -> None:
        ...

    @abstractmethod
    async def check_alerts(self, credential: Credential) -> None:
        """Ask the store to evaluate budget alerts for the session's user."""
        ...
