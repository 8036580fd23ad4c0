"""State containers a front end binds to: session, transaction cache, AI assistant."""

from .assistant import AIAssistant
from .cache import CacheSnapshot, TransactionCache
from .notifier import LogNotifier, Notifier
from .session import AuthSession, FileSessionStorage

__all__ = [
    "AIAssistant",
    "AuthSession",
    "CacheSnapshot",
    "FileSessionStorage",
    "LogNotifier",
    "Notifier",
    "TransactionCache",
]
