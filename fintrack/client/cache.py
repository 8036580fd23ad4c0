"""Client-side cache of the signed-in user's transactions."""

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, List, Optional, Set, Tuple

import structlog

from fintrack.domain.entities import Credential, Transaction, TransactionDraft
from fintrack.domain.exceptions import DomainException
from fintrack.domain.interfaces import TransactionStoreClient

from .notifier import LogNotifier, Notifier

if TYPE_CHECKING:
    from .session import AuthSession

logger = structlog.get_logger(__name__)

LOGIN_REQUIRED_MESSAGE = "You must be logged in to add a transaction."
ADDED_MESSAGE = "Transaction added successfully!"
UPDATED_MESSAGE = "Transaction updated successfully!"
DELETED_MESSAGE = "Transaction deleted successfully!"


@dataclass(frozen=True)
class CacheSnapshot:
    """Immutable view of the cache handed to listeners."""

    records: Tuple[Transaction, ...]
    loading: bool
    last_error: Optional[str]


Listener = Callable[[CacheSnapshot], None]


class TransactionCache:
    """
    Mirrors the user's transactions held by the remote store.

    Every mutation goes to the store first and the cache changes only after
    the store confirms it, so the cache never holds a record the store
    rejected. Failures leave the records untouched and are reported through
    the notifier.

    Concurrent mutations are not serialized: each applies its own effect
    when its response arrives. A load that resolves after the credential
    has changed is discarded so one session never sees another's records.
    """

    def __init__(
        self,
        store: TransactionStoreClient,
        notifier: Notifier | None = None,
    ):
        self._store = store
        self._notifier = notifier or LogNotifier()
        self._records: List[Transaction] = []
        self._loading = True
        self._last_error: Optional[str] = None
        self._credential: Optional[Credential] = None
        # False until the first load, which runs even for a None credential
        self._synced = False
        self._listeners: List[Listener] = []
        self._background_tasks: Set[asyncio.Task] = set()

    @property
    def records(self) -> Tuple[Transaction, ...]:
        return tuple(self._records)

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    @property
    def credential(self) -> Optional[Credential]:
        return self._credential

    def snapshot(self) -> CacheSnapshot:
        return CacheSnapshot(
            records=self.records,
            loading=self._loading,
            last_error=self._last_error,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called after every state change."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def attach(self, session: "AuthSession") -> Callable[[], None]:
        """
        Follow an auth session, reloading whenever its credential changes.

        The session's current credential is loaded straight away, so a cache
        attached to a signed-out session stops loading and one attached to a
        signed-in session fetches its records.
        """
        unsubscribe = session.subscribe(self.set_credential)
        await self.load(session.credential)
        return unsubscribe

    async def set_credential(self, credential: Optional[Credential]) -> None:
        """Switch sessions. Re-announcing the loaded credential is a no-op."""
        if self._synced and credential is self._credential:
            return
        await self.load(credential)

    async def load(self, credential: Optional[Credential]) -> None:
        """
        Replace the cached records with the store's list for `credential`.

        Without a credential the cache is emptied and no request is made.
        On failure the previous records are kept and `last_error` is set.
        """
        self._credential = credential
        self._synced = True

        if credential is None:
            self._records = []
            self._loading = False
            self._last_error = None
            self._emit()
            return

        self._loading = True
        self._emit()

        try:
            records = await self._store.list_transactions(credential)
        except DomainException as e:
            if credential is not self._credential:
                logger.info("stale_load_discarded", outcome="error")
                return
            logger.warning("transactions_load_failed", error=e.message)
            self._last_error = e.message
            self._loading = False
            self._emit()
            self._notifier.error(e.message)
            return

        if credential is not self._credential:
            logger.info("stale_load_discarded", outcome="success")
            return

        self._records = list(records)
        self._last_error = None
        self._loading = False
        logger.debug("transactions_loaded", count=len(self._records))
        self._emit()

    async def add(self, draft: TransactionDraft) -> bool:
        """
        Create a transaction and prepend the stored copy.

        Returns False without contacting the store when no one is signed in.
        A budget-alert check is scheduled after a successful add; its outcome
        never affects the result.
        """
        credential = self._credential
        if credential is None:
            self._notifier.error(LOGIN_REQUIRED_MESSAGE)
            return False

        try:
            created = await self._store.create_transaction(credential, draft)
        except DomainException as e:
            logger.warning("transaction_add_failed", error=e.message)
            self._notifier.error(e.message)
            return False

        self._records = [created, *self._records]
        self._emit()
        self._notifier.success(ADDED_MESSAGE)
        self._schedule_alert_check(credential)
        return True

    async def update(self, transaction: Transaction) -> None:
        """Send the edited transaction and swap in the stored copy by id."""
        credential = self._credential
        if credential is None:
            return

        try:
            updated = await self._store.update_transaction(credential, transaction)
        except DomainException as e:
            logger.warning(
                "transaction_update_failed",
                transaction_id=transaction.id,
                error=e.message,
            )
            self._notifier.error(e.message)
            return

        self._records = [updated if r.id == updated.id else r for r in self._records]
        self._emit()
        self._notifier.success(UPDATED_MESSAGE)

    async def delete(self, transaction_id: str) -> None:
        credential = self._credential
        if credential is None:
            return

        try:
            await self._store.delete_transaction(credential, transaction_id)
        except DomainException as e:
            logger.warning(
                "transaction_delete_failed",
                transaction_id=transaction_id,
                error=e.message,
            )
            self._notifier.error(e.message)
            return

        self._records = [r for r in self._records if r.id != transaction_id]
        self._emit()
        self._notifier.success(DELETED_MESSAGE)

    async def wait_for_background_tasks(self) -> None:
        """Wait for scheduled alert checks; used at shutdown and in tests."""
        if self._background_tasks:
            await asyncio.gather(*self._background_tasks, return_exceptions=True)

    def _schedule_alert_check(self, credential: Credential) -> None:
        task = asyncio.create_task(self._check_alerts(credential))
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)

    async def _check_alerts(self, credential: Credential) -> None:
        try:
            await self._store.check_alerts(credential)
        except Exception as e:
            # Detached task: nobody awaits it, so log instead of raising
            logger.warning(
                "budget_alert_check_failed",
                error=str(e),
                error_type=type(e).__name__,
            )

    def _emit(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)
