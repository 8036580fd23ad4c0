"""User-facing notifications raised by the client layer."""

from abc import ABC, abstractmethod

import structlog

logger = structlog.get_logger(__name__)


class Notifier(ABC):
    """
    Sink for transient success and error messages.

    A UI shows these as toasts; headless consumers can log or collect them.
    """

    @abstractmethod
    def success(self, message: str) -> None:
        ...

    @abstractmethod
    def error(self, message: str) -> None:
        ...


class LogNotifier(Notifier):
    """Writes notifications to the structured log."""

    def success(self, message: str) -> None:
        logger.info("notification", level="success", message=message)

    def error(self, message: str) -> None:
        logger.warning("notification", level="error", message=message)
