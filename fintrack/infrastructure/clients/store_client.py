"""HTTP implementation of TransactionStoreClient."""

from typing import List

import httpx
import structlog

from fintrack.core.config import settings
from fintrack.domain.entities import Credential, Transaction, TransactionDraft
from fintrack.domain.exceptions import StoreRequestException, StoreUnavailableException
from fintrack.domain.interfaces import TransactionStoreClient

from ._http import error_message, parse_body

logger = structlog.get_logger(__name__)


class HttpTransactionStoreClient(TransactionStoreClient):
    """
    HTTP client for the remote transaction store.

    One request per call and no retries; retrying is the caller's decision.
    Transport failures raise StoreUnavailableException, non-success statuses
    raise StoreRequestException carrying the server's message when it sent one.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = (base_url or f"{settings.api_base_url}/transactions").rstrip("/")
        self._timeout = timeout or settings.client_timeout
        self._transport = transport

    async def list_transactions(self, credential: Credential) -> List[Transaction]:
        response = await self._request(
            "GET",
            self._base_url,
            credential,
            default_error="Failed to fetch transactions.",
        )
        return parse_body(response, lambda data: [Transaction.from_dict(item) for item in data])

    async def create_transaction(
        self,
        credential: Credential,
        draft: TransactionDraft,
    ) -> Transaction:
        response = await self._request(
            "POST",
            self._base_url,
            credential,
            json=draft.to_dict(),
            default_error="Failed to add transaction.",
        )
        return parse_body(response, Transaction.from_dict)

    async def update_transaction(
        self,
        credential: Credential,
        transaction: Transaction,
    ) -> Transaction:
        response = await self._request(
            "PUT",
            f"{self._base_url}/{transaction.id}",
            credential,
            json=transaction.editable_fields(),
            default_error="Failed to update transaction.",
        )
        return parse_body(response, Transaction.from_dict)

    async def delete_transaction(
        self,
        credential: Credential,
        transaction_id: str,
    ) -> None:
        await self._request(
            "DELETE",
            f"{self._base_url}/{transaction_id}",
            credential,
            default_error="Failed to delete transaction.",
        )

    async def check_alerts(self, credential: Credential) -> None:
        await self._request(
            "POST",
            f"{self._base_url}/check-alerts",
            credential,
            default_error="Failed to check budget alerts.",
        )

    async def _request(
        self,
        method: str,
        url: str,
        credential: Credential,
        default_error: str,
        json: dict | None = None,
    ) -> httpx.Response:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.request(
                    method,
                    url,
                    json=json,
                    headers=credential.authorization_header,
                )
        except httpx.HTTPError as e:
            logger.warning(
                "store_unreachable",
                method=method,
                url=url,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise StoreUnavailableException() from e

        if response.status_code >= 400:
            message = error_message(response, default_error)
            logger.warning(
                "store_request_failed",
                method=method,
                url=url,
                status_code=response.status_code,
                message=message,
            )
            raise StoreRequestException(message=message, status_code=response.status_code)

        return response

