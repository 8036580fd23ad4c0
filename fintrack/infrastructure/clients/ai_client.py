"""HTTP implementation of AIProviderClient for a Gemini-style generateContent API."""

import asyncio
import json
import re
from typing import Any, Dict, List, Sequence

import httpx
import structlog

from fintrack.core.config import settings
from fintrack.core.metrics import (
    record_ai_provider_failure,
    record_ai_provider_retry,
    track_ai_provider_latency,
)
from fintrack.domain.entities import (
    BudgetCategory,
    BudgetRecommendation,
    ChatMessage,
    ScannedBill,
    Transaction,
    format_timestamp,
    parse_amount,
)
from fintrack.domain.exceptions import (
    AIGenerationException,
    AIProviderException,
    AIProviderTimeoutException,
)
from fintrack.domain.interfaces import AIProviderClient

from .prompts import (
    BILL_SCAN_PROMPT,
    BUDGET_PROMPT,
    CHAT_SYSTEM_PROMPT,
    SUMMARY_PROMPT,
)

logger = structlog.get_logger(__name__)

_JSON_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.MULTILINE)
_DATA_URL = re.compile(r"^data:(?P<mime>[\w/+.-]+);base64,")


def _transactions_as_text(transactions: Sequence[Transaction]) -> str:
    """Render transactions as compact JSON lines for prompting."""
    return "\n".join(
        json.dumps(
            {
                "type": t.type.value,
                "title": t.title,
                "amount": float(t.amount),
                "date": format_timestamp(t.date)[:10],
                "category": t.category,
            }
        )
        for t in transactions
    )


def _loads_json(text: str) -> Any:
    """Parse model output that may be wrapped in a markdown code fence."""
    return json.loads(_JSON_FENCE.sub("", text.strip()))


class HttpGenerativeAIClient(AIProviderClient):
    """
    HTTP client for the generative AI provider.

    Sends generateContent requests with retry and exponential backoff on
    timeouts and transport errors. Error statuses are not retried.
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = (base_url or settings.ai_api_url).rstrip("/")
        self._api_key = api_key if api_key is not None else settings.ai_api_key
        self._model = model or settings.ai_model
        self._timeout = timeout if timeout is not None else settings.ai_timeout
        self._max_retries = max_retries if max_retries is not None else settings.ai_max_retries
        self._transport = transport

    async def generate_summary(self, transactions: Sequence[Transaction]) -> str:
        prompt = f"{SUMMARY_PROMPT}\n\nTransactions:\n{_transactions_as_text(transactions)}"
        return await self._generate_text([self._user_turn(prompt)])

    async def analyze_bill(self, image_base64: str) -> ScannedBill:
        mime_type = "image/jpeg"
        match = _DATA_URL.match(image_base64)
        if match:
            mime_type = match.group("mime")
            image_base64 = image_base64[match.end():]

        contents = [
            {
                "role": "user",
                "parts": [
                    {"text": BILL_SCAN_PROMPT},
                    {"inline_data": {"mime_type": mime_type, "data": image_base64}},
                ],
            }
        ]
        text = await self._generate_text(contents, json_output=True)

        try:
            data = _loads_json(text)
            amount = data.get("amount")
            return ScannedBill(
                title=data.get("title"),
                amount=parse_amount(amount) if amount not in (None, "") else None,
                date=data.get("date"),
                category=data.get("category"),
                description=data.get("description"),
            )
        except (ValueError, TypeError, AttributeError, ArithmeticError) as e:
            record_ai_provider_failure("malformed")
            raise AIGenerationException(f"Failed to parse bill with AI: {e}") from e

    async def chat(
        self,
        history: Sequence[ChatMessage],
        transactions: Sequence[Transaction],
    ) -> str:
        context = (
            f"{CHAT_SYSTEM_PROMPT}\n\n"
            f"The user's recent transactions:\n{_transactions_as_text(transactions)}"
        )
        contents = [self._user_turn(context)]
        for message in history:
            role = "user" if message.sender == "user" else "model"
            contents.append({"role": role, "parts": [{"text": message.text}]})

        return await self._generate_text(contents)

    async def recommend_budget(
        self,
        transactions: Sequence[Transaction],
    ) -> BudgetRecommendation:
        prompt = f"{BUDGET_PROMPT}\n\nTransactions:\n{_transactions_as_text(transactions)}"

        try:
            text = await self._generate_text([self._user_turn(prompt)], json_output=True)
            data = _loads_json(text)
            return BudgetRecommendation(
                total_budget=parse_amount(data["total_budget"]),
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
        except (AIGenerationException, ValueError, TypeError, KeyError, ArithmeticError) as e:
            record_ai_provider_failure("malformed")
            raise AIGenerationException(f"Failed to generate budget with AI: {e}") from e

    def _user_turn(self, text: str) -> Dict[str, Any]:
        return {"role": "user", "parts": [{"text": text}]}

    async def _generate_text(
        self,
        contents: List[Dict[str, Any]],
        json_output: bool = False,
    ) -> str:
        payload: Dict[str, Any] = {"contents": contents}
        if json_output:
            payload["generationConfig"] = {"responseMimeType": "application/json"}

        data = await self._post(payload)

        try:
            parts = data["candidates"][0]["content"]["parts"]
            text = "".join(part.get("text", "") for part in parts).strip()
        except (KeyError, IndexError, TypeError) as e:
            record_ai_provider_failure("malformed")
            raise AIGenerationException(f"AI response had no content: {e}") from e

        if not text:
            record_ai_provider_failure("malformed")
            raise AIGenerationException("AI response was empty")

        return text

    async def _post(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST a generateContent request.

        Implements retry logic with exponential backoff.
        """
        url = f"{self._base_url}/models/{self._model}:generateContent"
        headers = {"x-goog-api-key": self._api_key}

        last_exception = None

        for attempt in range(self._max_retries):
            try:
                with track_ai_provider_latency():
                    async with httpx.AsyncClient(
                        timeout=self._timeout,
                        transport=self._transport,
                    ) as client:
                        response = await client.post(url, json=payload, headers=headers)

                        if response.status_code >= 400:
                            record_ai_provider_failure("error")
                            raise AIProviderException(
                                message=f"AI provider error: {response.text[:200]}",
                                status_code=response.status_code,
                            )

                        return response.json()

            except httpx.TimeoutException:
                record_ai_provider_failure("timeout")
                last_exception = AIProviderTimeoutException()
                logger.warning(
                    "ai_provider_timeout",
                    attempt=attempt + 1,
                    max_retries=self._max_retries,
                )
            except AIProviderException:
                raise
            except (httpx.HTTPError, ValueError) as e:
                record_ai_provider_failure("error")
                last_exception = AIProviderException(
                    message=f"Unexpected error: {str(e)}",
                )
                logger.error(
                    "ai_provider_error",
                    attempt=attempt + 1,
                    error=str(e),
                )

            if attempt < self._max_retries - 1:
                record_ai_provider_retry()
                await asyncio.sleep(2**attempt * 0.1)

        raise last_exception or AIProviderException("Failed to reach AI provider")
