"""HTTP clients for the backend's auth and AI endpoints, used by the client layer."""

from typing import Any, Dict, Sequence

import httpx
import structlog

from fintrack.core.config import settings
from fintrack.domain.entities import (
    BudgetCategory,
    BudgetRecommendation,
    ChatMessage,
    Credential,
    ScannedBill,
    UserProfile,
    parse_amount,
)
from fintrack.domain.exceptions import StoreRequestException, StoreUnavailableException

from ._http import error_message, parse_body

logger = structlog.get_logger(__name__)


class _BackendClient:
    """Single-shot JSON requests against the backend API."""

    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout or settings.client_timeout
        self._transport = transport

    async def _request(
        self,
        method: str,
        path: str,
        default_error: str,
        credential: Credential | None = None,
        json: dict | None = None,
    ) -> httpx.Response:
        url = f"{self._base_url}{path}"
        headers = credential.authorization_header if credential else {}

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.request(method, url, json=json, headers=headers)
        except httpx.HTTPError as e:
            logger.warning("backend_unreachable", url=url, error=str(e))
            raise StoreUnavailableException() from e

        if response.status_code >= 400:
            raise StoreRequestException(
                message=error_message(response, default_error),
                status_code=response.status_code,
            )

        return response


class HttpAuthClient(_BackendClient):
    """Client for /api/auth."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(base_url or f"{settings.api_base_url}/auth", timeout, transport)

    async def login(self, email: str, password: str) -> Credential:
        response = await self._request(
            "POST",
            "/login",
            "Login failed.",
            json={"email": email, "password": password},
        )
        return parse_body(response, _credential)

    async def register(self, name: str, email: str, password: str) -> Credential:
        response = await self._request(
            "POST",
            "/register",
            "Signup failed.",
            json={"name": name, "email": email, "password": password},
        )
        return parse_body(response, _credential)

    async def logout(self, credential: Credential) -> None:
        await self._request("POST", "/logout", "Logout failed.", credential=credential)


def _credential(data: Dict[str, Any]) -> Credential:
    user = data["user"]
    if not isinstance(user, dict):
        raise TypeError("user must be an object")
    return Credential(token=str(data["token"]), user=UserProfile.from_dict(user))


def _scanned_bill(data: Dict[str, Any]) -> ScannedBill:
    scanned = data.get("scannedData") or {}
    amount = scanned.get("amount")
    return ScannedBill(
        title=scanned.get("title"),
        amount=parse_amount(amount) if amount is not None else None,
        date=scanned.get("date"),
        category=scanned.get("category"),
        description=scanned.get("description"),
    )


def _budget_recommendation(data: Dict[str, Any]) -> BudgetRecommendation:
    return BudgetRecommendation(
        total_budget=parse_amount(data.get("total_budget", 0)),
        categories=[
            BudgetCategory(
                category=item["category"],
                amount=parse_amount(item["amount"]),
                reason=item.get("reason", ""),
            )
            for item in data.get("categories", [])
        ],
        advice=data.get("advice", ""),
    )


class HttpAIAssistantClient(_BackendClient):
    """Client for /api/ai."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        # AI calls wait on a third-party model, so allow well beyond the CRUD timeout
        super().__init__(
            base_url or f"{settings.api_base_url}/ai",
            timeout or settings.ai_timeout,
            transport,
        )

    async def summary(self, credential: Credential) -> str:
        response = await self._request(
            "GET", "/summary", "Failed to generate summary.", credential=credential
        )
        return parse_body(response, lambda data: str(data.get("summary", "")))

    async def scan_bill(self, credential: Credential, image_base64: str) -> ScannedBill:
        response = await self._request(
            "POST",
            "/scan",
            "Failed to scan the bill.",
            credential=credential,
            json={"image": image_base64},
        )
        return parse_body(response, _scanned_bill)

    async def chat(self, credential: Credential, history: Sequence[ChatMessage]) -> str:
        response = await self._request(
            "POST",
            "/chat",
            "Failed to get a response from the chatbot.",
            credential=credential,
            json={"history": [m.to_dict() for m in history]},
        )
        return parse_body(response, lambda data: str(data.get("text", "")))

    async def recommend_budget(self, credential: Credential) -> BudgetRecommendation:
        response = await self._request(
            "GET",
            "/recommend-budget",
            "Failed to generate a budget.",
            credential=credential,
        )
        return parse_body(response, _budget_recommendation)
