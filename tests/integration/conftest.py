"""
Fixtures for integration tests.

Provides:
- Test client for FastAPI app
- Mock AI provider client
- In-memory database for testing
- Helpers to register users and create transactions
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import AsyncGenerator, List, Sequence

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from fintrack.main import app
from fintrack.core.dependencies import get_ai_client
from fintrack.domain.entities import (
    BudgetCategory,
    BudgetRecommendation,
    ChatMessage,
    ScannedBill,
    Transaction,
)
from fintrack.domain.interfaces import AIProviderClient
from fintrack.infrastructure.database import Base, get_db_session


# =============================================================================
# Mock Clients
# =============================================================================

class MockAIProviderClient(AIProviderClient):
    """Mock AI provider that records what it was sent."""

    def __init__(self):
        self.fail_with: Exception | None = None
        self.calls: List[tuple] = []

    def _record(self, feature: str, transactions: Sequence[Transaction] = ()) -> None:
        self.calls.append((feature, list(transactions)))
        if self.fail_with is not None:
            raise self.fail_with

    async def generate_summary(self, transactions: Sequence[Transaction]) -> str:
        self._record("summary", transactions)
        return "Most of your spending went to Food."

    async def analyze_bill(self, image_base64: str) -> ScannedBill:
        self._record("scan")
        return ScannedBill(
            title="Electric bill",
            amount=Decimal("82.40"),
            date="2025-06-01",
            category="Utilities",
        )

    async def chat(
        self,
        history: Sequence[ChatMessage],
        transactions: Sequence[Transaction],
    ) -> str:
        self._record("chat", transactions)
        return f"You asked: {history[-1].text}"

    async def recommend_budget(
        self,
        transactions: Sequence[Transaction],
    ) -> BudgetRecommendation:
        self._record("budget", transactions)
        return BudgetRecommendation(
            total_budget=Decimal("1500"),
            categories=[BudgetCategory("Food", Decimal("400"), "Largest expense")],
            advice="Cook at home more often.",
        )


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def test_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def test_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session


# =============================================================================
# App Client Fixtures
# =============================================================================

@pytest.fixture
def mock_ai_client() -> MockAIProviderClient:
    return MockAIProviderClient()


@pytest_asyncio.fixture
async def client(
    test_session: AsyncSession,
    mock_ai_client: MockAIProviderClient,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with mocked dependencies.

    This client:
    - Shares one in-memory SQLite session across requests
    - Mocks the generative AI provider
    """
    async def override_get_db_session():
        yield test_session

    def override_get_ai_client():
        return mock_ai_client

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_ai_client] = override_get_ai_client

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def asgi_transport(client: AsyncClient) -> ASGITransport:
    """Transport for client-layer adapters, sharing the `client` overrides."""
    return ASGITransport(app=app)


# =============================================================================
# Helper Fixtures
# =============================================================================

@pytest.fixture
def register(client: AsyncClient):
    """Return a coroutine that registers a user and yields auth headers."""

    async def _register(
        email: str = "ada@example.com",
        name: str = "Ada",
        password: str = "secret123",
    ) -> dict:
        response = await client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _register


@pytest_asyncio.fixture
async def auth_headers(register) -> dict:
    return await register()


@pytest.fixture
def create_transaction(client: AsyncClient):
    """Return a coroutine that stores a transaction and returns the response body."""

    async def _create(
        headers: dict,
        type: str = "Expense",
        title: str = "Groceries",
        amount: float = 42.5,
        category: str = "Food",
        date: str | None = None,
        description: str | None = None,
    ) -> dict:
        response = await client.post(
            "/api/transactions",
            json={
                "type": type,
                "title": title,
                "amount": amount,
                "date": date or datetime.now(timezone.utc).isoformat(),
                "category": category,
                "description": description,
            },
            headers=headers,
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create
