"""Unit tests for the client AI assistant."""

from decimal import Decimal
from unittest.mock import AsyncMock

import httpx
import pytest
import pytest_asyncio

from fintrack.client import AIAssistant
from fintrack.client.assistant import LOGIN_REQUIRED_MESSAGE
from fintrack.domain.entities import BudgetRecommendation, Credential, UserProfile
from fintrack.domain.exceptions import StoreRequestException
from fintrack.infrastructure.clients import HttpAIAssistantClient

from tests.fakes import RecordingNotifier


@pytest.fixture
def ai_client() -> AsyncMock:
    client = AsyncMock()
    client.summary.return_value = "You spend most on Food."
    client.chat.return_value = "About $42."
    client.recommend_budget.return_value = BudgetRecommendation(total_budget=Decimal("1500"))
    return client


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def credential() -> Credential:
    return Credential(token="tok", user=UserProfile(name="Ada", email="ada@example.com"))


@pytest_asyncio.fixture
async def assistant(ai_client, notifier, credential) -> AIAssistant:
    assistant = AIAssistant(ai_client, notifier=notifier)
    await assistant.set_credential(credential)
    return assistant


class TestAssistant:

    @pytest.mark.asyncio
    async def test_requires_login(self, ai_client, notifier):
        assistant = AIAssistant(ai_client, notifier=notifier)

        assert await assistant.generate_summary() is None

        assert notifier.errors == [LOGIN_REQUIRED_MESSAGE]
        ai_client.summary.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_summary_is_kept(self, assistant, credential, ai_client):
        assert await assistant.generate_summary() == "You spend most on Food."

        assert assistant.summary == "You spend most on Food."
        assert assistant.loading is False
        ai_client.summary.assert_awaited_once_with(credential)

    @pytest.mark.asyncio
    async def test_summary_failure_shows_server_message(self, assistant, ai_client, notifier):
        ai_client.summary.side_effect = StoreRequestException(
            "Failed to generate AI summary.", status_code=500
        )

        assert await assistant.generate_summary() is None

        assert notifier.errors == ["Failed to generate AI summary."]
        assert assistant.loading is False

    @pytest.mark.asyncio
    async def test_chat_sends_full_history(self, assistant, ai_client, credential):
        await assistant.chat("Hi")
        await assistant.chat("Food spend?")

        sent = ai_client.chat.call_args.args[1]
        assert [(m.sender, m.text) for m in sent] == [
            ("user", "Hi"),
            ("bot", "About $42."),
            ("user", "Food spend?"),
        ]
        assert len(assistant.history) == 4

    @pytest.mark.asyncio
    async def test_failed_chat_does_not_record_turn(self, assistant, ai_client, notifier):
        ai_client.chat.side_effect = StoreRequestException(
            "Failed to get a response from the chatbot.", status_code=500
        )

        assert await assistant.chat("Hi") is None

        assert assistant.history == ()
        assert notifier.errors == ["Failed to get a response from the chatbot."]

    @pytest.mark.asyncio
    async def test_switching_user_clears_state(self, assistant):
        await assistant.generate_summary()
        await assistant.chat("Hi")

        await assistant.set_credential(None)

        assert assistant.summary == ""
        assert assistant.history == ()


class TestAssistantOverHttp:

    @pytest.mark.asyncio
    async def test_malformed_budget_body_is_reported(self, notifier, credential):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json=[1, 2]))
        assistant = AIAssistant(
            HttpAIAssistantClient(base_url="http://backend.test/api/ai", transport=transport),
            notifier=notifier,
        )
        await assistant.set_credential(credential)

        assert await assistant.recommend_budget() is None

        assert notifier.errors == ["Received an invalid response from the server."]
        assert assistant.loading is False
