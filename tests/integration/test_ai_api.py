"""
Integration tests for the AI proxy endpoints.

These tests verify:
1. Each feature forwards a bounded window of the user's transactions
2. Request validation (missing image, missing history, thin data)
3. Provider failures map to the feature's error message
"""

import pytest
from httpx import AsyncClient

from fintrack.domain.exceptions import AIGenerationException, AIProviderException


class TestSummary:
    """Tests for GET /api/ai/summary endpoint."""

    @pytest.mark.asyncio
    async def test_summary_without_transactions(
        self,
        client: AsyncClient,
        auth_headers: dict,
        mock_ai_client,
    ):
        response = await client.get("/api/ai/summary", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["summary"] == (
            "Not enough data for a summary. Add some transactions first!"
        )
        assert mock_ai_client.calls == []

    @pytest.mark.asyncio
    async def test_summary_uses_at_most_thirty_transactions(
        self,
        client: AsyncClient,
        auth_headers: dict,
        create_transaction,
        mock_ai_client,
    ):
        for i in range(32):
            await create_transaction(auth_headers, title=f"Item {i}", amount=1 + i)

        response = await client.get("/api/ai/summary", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["summary"] == "Most of your spending went to Food."
        feature, sent = mock_ai_client.calls[0]
        assert feature == "summary"
        assert len(sent) == 30

    @pytest.mark.asyncio
    async def test_summary_provider_failure_returns_500(
        self,
        client: AsyncClient,
        auth_headers: dict,
        create_transaction,
        mock_ai_client,
    ):
        await create_transaction(auth_headers)
        mock_ai_client.fail_with = AIProviderException("quota exceeded", 429)

        response = await client.get("/api/ai/summary", headers=auth_headers)

        assert response.status_code == 500
        assert response.json()["message"] == "Failed to generate AI summary."


class TestScan:
    """Tests for POST /api/ai/scan endpoint."""

    @pytest.mark.asyncio
    async def test_scan_returns_scanned_data(
        self,
        client: AsyncClient,
        auth_headers: dict,
    ):
        response = await client.post(
            "/api/ai/scan",
            json={"image": "data:image/png;base64,iVBORw0KGgo="},
            headers=auth_headers,
        )

        assert response.status_code == 200
        scanned = response.json()["scannedData"]
        assert scanned["title"] == "Electric bill"
        assert scanned["amount"] == 82.4
        assert scanned["category"] == "Utilities"

    @pytest.mark.asyncio
    async def test_scan_without_image_returns_400(
        self,
        client: AsyncClient,
        auth_headers: dict,
    ):
        response = await client.post("/api/ai/scan", json={}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "No image data provided."


class TestChat:
    """Tests for POST /api/ai/chat endpoint."""

    @pytest.mark.asyncio
    async def test_chat_answers_last_message(
        self,
        client: AsyncClient,
        auth_headers: dict,
    ):
        response = await client.post(
            "/api/ai/chat",
            json={
                "history": [
                    {"sender": "user", "text": "Hi"},
                    {"sender": "bot", "text": "Hello!"},
                    {"sender": "user", "text": "How much did I spend?"},
                ]
            },
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["text"] == "You asked: How much did I spend?"

    @pytest.mark.asyncio
    async def test_chat_without_history_returns_400(
        self,
        client: AsyncClient,
        auth_headers: dict,
    ):
        response = await client.post("/api/ai/chat", json={"history": []}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "No chat history provided."


class TestRecommendBudget:
    """Tests for GET /api/ai/recommend-budget endpoint."""

    @pytest.mark.asyncio
    async def test_thin_history_returns_400(
        self,
        client: AsyncClient,
        auth_headers: dict,
        create_transaction,
    ):
        await create_transaction(auth_headers, type="Income", amount=2000, category="Work")
        for _ in range(4):
            await create_transaction(auth_headers)

        response = await client.get("/api/ai/recommend-budget", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"].startswith("Not enough transaction data.")

    @pytest.fixture
    def seed_budget_history(self, auth_headers: dict, create_transaction):
        async def _seed():
            await create_transaction(auth_headers, type="Income", amount=2000, category="Work")
            for i in range(5):
                await create_transaction(auth_headers, title=f"Expense {i}", amount=10 + i)

        return _seed

    @pytest.mark.asyncio
    async def test_recommendation_is_relayed(
        self,
        client: AsyncClient,
        auth_headers: dict,
        seed_budget_history,
    ):
        await seed_budget_history()

        response = await client.get("/api/ai/recommend-budget", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["total_budget"] == 1500
        assert data["categories"][0]["category"] == "Food"
        assert data["advice"] == "Cook at home more often."

    @pytest.mark.asyncio
    async def test_unparseable_budget_maps_to_trouble_message(
        self,
        client: AsyncClient,
        auth_headers: dict,
        seed_budget_history,
        mock_ai_client,
    ):
        await seed_budget_history()
        mock_ai_client.fail_with = AIGenerationException(
            "Failed to generate budget with AI: Expecting value"
        )

        response = await client.get("/api/ai/recommend-budget", headers=auth_headers)

        assert response.status_code == 500
        assert response.json()["message"].startswith(
            "Our AI had trouble analyzing your spending patterns."
        )

    @pytest.mark.asyncio
    async def test_other_failures_map_to_server_error_message(
        self,
        client: AsyncClient,
        auth_headers: dict,
        seed_budget_history,
        mock_ai_client,
    ):
        await seed_budget_history()
        mock_ai_client.fail_with = AIProviderException("upstream down", 503)

        response = await client.get("/api/ai/recommend-budget", headers=auth_headers)

        assert response.status_code == 500
        assert response.json()["message"] == (
            "A server error occurred while generating your budget."
        )
