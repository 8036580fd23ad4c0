"""External API client implementations."""

from .ai_client import HttpGenerativeAIClient
from .api_client import HttpAIAssistantClient, HttpAuthClient
from .store_client import HttpTransactionStoreClient

__all__ = [
    "HttpAIAssistantClient",
    "HttpAuthClient",
    "HttpGenerativeAIClient",
    "HttpTransactionStoreClient",
]
