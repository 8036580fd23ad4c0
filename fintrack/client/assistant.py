"""Client-side access to the AI features."""

from typing import Awaitable, Callable, List, Optional, Tuple, TypeVar

import structlog

from fintrack.domain.entities import (
    BudgetRecommendation,
    ChatMessage,
    Credential,
    ScannedBill,
)
from fintrack.domain.exceptions import DomainException
from fintrack.infrastructure.clients import HttpAIAssistantClient

from .notifier import LogNotifier, Notifier
from .session import AuthSession

logger = structlog.get_logger(__name__)

T = TypeVar("T")

LOGIN_REQUIRED_MESSAGE = "You must be logged in to use this feature."


class AIAssistant:
    """
    Thin stateful wrapper over the backend AI endpoints.

    Tracks the latest summary and the chat conversation. Failures are
    reported through the notifier and the call returns None.
    """

    def __init__(
        self,
        client: HttpAIAssistantClient | None = None,
        notifier: Notifier | None = None,
    ):
        self._client = client or HttpAIAssistantClient()
        self._notifier = notifier or LogNotifier()
        self._credential: Optional[Credential] = None
        self._summary = ""
        self._loading = False
        self._history: List[ChatMessage] = []

    @property
    def summary(self) -> str:
        return self._summary

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def history(self) -> Tuple[ChatMessage, ...]:
        return tuple(self._history)

    def attach(self, session: AuthSession) -> Callable[[], None]:
        self._credential = session.credential
        return session.subscribe(self.set_credential)

    async def set_credential(self, credential: Optional[Credential]) -> None:
        if credential is not self._credential:
            self._summary = ""
            self._history = []
        self._credential = credential

    async def generate_summary(self) -> Optional[str]:
        summary = await self._call("summary", self._client.summary)
        if summary is not None:
            self._summary = summary
        return summary

    async def scan_bill(self, image_base64: str) -> Optional[ScannedBill]:
        return await self._call(
            "scan",
            lambda credential: self._client.scan_bill(credential, image_base64),
        )

    async def chat(self, text: str) -> Optional[str]:
        """Send a user message with the conversation so far; records the reply."""
        history = [*self._history, ChatMessage(sender="user", text=text)]
        reply = await self._call(
            "chat",
            lambda credential: self._client.chat(credential, history),
        )
        if reply is not None:
            self._history = [*history, ChatMessage(sender="bot", text=reply)]
        return reply

    async def recommend_budget(self) -> Optional[BudgetRecommendation]:
        return await self._call("recommend_budget", self._client.recommend_budget)

    def clear_chat(self) -> None:
        self._history = []

    async def _call(
        self,
        feature: str,
        request: Callable[[Credential], Awaitable[T]],
    ) -> Optional[T]:
        credential = self._credential
        if credential is None:
            self._notifier.error(LOGIN_REQUIRED_MESSAGE)
            return None

        self._loading = True
        try:
            return await request(credential)
        except DomainException as e:
            logger.warning("ai_request_failed", feature=feature, error=e.message)
            self._notifier.error(e.message)
            return None
        finally:
            self._loading = False
