"""
Unit tests for the client-side transaction cache.

These tests verify:
1. Loads replace records, keep them on failure, and discard stale results
2. add/update/delete apply only server-confirmed changes
3. The budget-alert check is detached from the outcome of add
4. Listeners see every state change
5. Attaching to a session syncs to its current credential
"""

import asyncio
from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

from fintrack.client import AuthSession, FileSessionStorage, TransactionCache
from fintrack.client.cache import (
    ADDED_MESSAGE,
    DELETED_MESSAGE,
    LOGIN_REQUIRED_MESSAGE,
    UPDATED_MESSAGE,
)
from fintrack.domain.entities import (
    Credential,
    Transaction,
    TransactionDraft,
    TransactionType,
    UserProfile,
)
from fintrack.domain.exceptions import StoreRequestException, StoreUnavailableException

from tests.fakes import FakeStoreClient, RecordingNotifier


# =============================================================================
# Test Fixtures
# =============================================================================

def make_credential(token: str = "token-a") -> Credential:
    return Credential(token=token, user=UserProfile(name="Ada", email="ada@example.com"))


def make_transaction(id: str, title: str = "Groceries", amount: str = "10") -> Transaction:
    return Transaction(
        id=id,
        type=TransactionType.EXPENSE,
        title=title,
        amount=Decimal(amount),
        date=datetime(2025, 6, 1, tzinfo=timezone.utc),
        category="Food",
    )


def make_draft(title: str = "Coffee") -> TransactionDraft:
    return TransactionDraft(
        type=TransactionType.EXPENSE,
        title=title,
        amount=Decimal("3.50"),
        date=datetime(2025, 6, 2, tzinfo=timezone.utc),
        category="Food",
    )


@pytest.fixture
def store() -> FakeStoreClient:
    return FakeStoreClient()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def cache(store: FakeStoreClient, notifier: RecordingNotifier) -> TransactionCache:
    return TransactionCache(store, notifier=notifier)


@pytest.fixture
def credential() -> Credential:
    return make_credential()


@pytest_asyncio.fixture
async def loaded_cache(cache, store, credential) -> TransactionCache:
    store.seed(credential, make_transaction("t2", "Second"), make_transaction("t1", "First"))
    await cache.load(credential)
    return cache


# =============================================================================
# Load Tests
# =============================================================================

class TestLoad:

    def test_initial_state(self, cache: TransactionCache):
        assert cache.records == ()
        assert cache.loading is True
        assert cache.last_error is None

    @pytest.mark.asyncio
    async def test_load_replaces_records_in_store_order(self, cache, store, credential):
        store.seed(credential, make_transaction("b"), make_transaction("a"))

        await cache.load(credential)

        assert [t.id for t in cache.records] == ["b", "a"]
        assert cache.loading is False
        assert cache.last_error is None

    @pytest.mark.asyncio
    async def test_load_without_credential_empties_cache(self, loaded_cache, store):
        calls_before = len(store.calls)

        await loaded_cache.load(None)

        assert loaded_cache.records == ()
        assert loaded_cache.loading is False
        assert len(store.calls) == calls_before

    @pytest.mark.asyncio
    async def test_failed_load_keeps_previous_records(
        self,
        loaded_cache,
        store,
        credential,
        notifier,
    ):
        before = loaded_cache.records
        store.fail_next = StoreUnavailableException()

        await loaded_cache.load(credential)

        assert loaded_cache.records == before
        assert loaded_cache.last_error == "Could not connect to the server."
        assert loaded_cache.loading is False
        assert notifier.errors == ["Could not connect to the server."]

    @pytest.mark.asyncio
    async def test_successful_load_clears_last_error(self, loaded_cache, store, credential):
        store.fail_next = StoreRequestException("boom", status_code=500)
        await loaded_cache.load(credential)

        await loaded_cache.load(credential)

        assert loaded_cache.last_error is None

    @pytest.mark.asyncio
    async def test_stale_load_is_discarded(self, cache, store):
        old = make_credential("old")
        new = make_credential("new")
        store.seed(old, make_transaction("old-1"))
        store.seed(new, make_transaction("new-1"))
        store.gates["old"] = asyncio.Event()

        slow = asyncio.create_task(cache.load(old))
        await asyncio.sleep(0)
        await cache.load(new)
        store.gates["old"].set()
        await slow

        assert cache.credential is new
        assert [t.id for t in cache.records] == ["new-1"]
        assert cache.loading is False

    @pytest.mark.asyncio
    async def test_set_credential_ignores_same_credential(self, loaded_cache, store, credential):
        calls_before = store.calls.count("list")

        await loaded_cache.set_credential(credential)

        assert store.calls.count("list") == calls_before

    @pytest.mark.asyncio
    async def test_new_credential_object_reloads_even_with_same_token(
        self,
        loaded_cache,
        store,
        credential,
    ):
        calls_before = store.calls.count("list")
        relogin = Credential(token=credential.token, user=credential.user)

        await loaded_cache.set_credential(relogin)

        assert store.calls.count("list") == calls_before + 1

    @pytest.mark.asyncio
    async def test_first_announcement_of_no_credential_stops_loading(self, cache, store):
        await cache.set_credential(None)

        assert cache.loading is False
        assert cache.records == ()
        assert store.calls == []


class TestAttach:

    @pytest.mark.asyncio
    async def test_attach_to_signed_out_session_stops_loading(self, cache, store, tmp_path):
        session = AuthSession(
            auth_client=AsyncMock(),
            storage=FileSessionStorage(tmp_path / "session.json"),
        )

        await cache.attach(session)
        await session.restore()

        assert cache.loading is False
        assert cache.records == ()
        assert store.calls == []

    @pytest.mark.asyncio
    async def test_attach_to_signed_in_session_loads_records(self, cache, store, credential):
        auth_client = AsyncMock()
        auth_client.login.return_value = credential
        session = AuthSession(auth_client=auth_client)
        await session.login("ada@example.com", "secret123")
        store.seed(credential, make_transaction("1"))

        await cache.attach(session)

        assert cache.credential is credential
        assert [t.id for t in cache.records] == ["1"]
        assert store.calls == ["list"]

    @pytest.mark.asyncio
    async def test_attached_cache_follows_login_and_logout(self, cache, store, credential):
        auth_client = AsyncMock()
        auth_client.login.return_value = credential
        session = AuthSession(auth_client=auth_client)
        store.seed(credential, make_transaction("1"))
        await cache.attach(session)

        await session.login("ada@example.com", "secret123")
        assert [t.id for t in cache.records] == ["1"]

        await session.logout()
        assert cache.records == ()
        assert cache.loading is False


# =============================================================================
# Add Tests
# =============================================================================

class TestAdd:

    @pytest.mark.asyncio
    async def test_add_without_credential_fails_fast(self, cache, store, notifier):
        assert await cache.add(make_draft()) is False

        assert store.calls == []
        assert notifier.errors == [LOGIN_REQUIRED_MESSAGE]

    @pytest.mark.asyncio
    async def test_add_prepends_stored_record(self, loaded_cache, notifier):
        assert await loaded_cache.add(make_draft("Coffee")) is True

        records = loaded_cache.records
        assert len(records) == 3
        assert records[0].title == "Coffee"
        assert records[0].id
        assert [t.id for t in records[1:]] == ["t2", "t1"]
        assert notifier.successes == [ADDED_MESSAGE]

    @pytest.mark.asyncio
    async def test_failed_add_leaves_records_untouched(self, loaded_cache, store, notifier):
        before = loaded_cache.records
        store.fail_next = StoreRequestException("Validation failed", status_code=400)

        assert await loaded_cache.add(make_draft()) is False

        assert loaded_cache.records == before
        assert notifier.errors == ["Validation failed"]
        assert "check_alerts" not in store.calls

    @pytest.mark.asyncio
    async def test_add_schedules_alert_check(self, loaded_cache, store):
        await loaded_cache.add(make_draft())
        await loaded_cache.wait_for_background_tasks()

        assert store.calls[-1] == "check_alerts"

    @pytest.mark.asyncio
    async def test_alert_check_failure_does_not_affect_add(
        self,
        loaded_cache,
        store,
        notifier,
    ):
        store.fail_alerts = StoreUnavailableException()

        assert await loaded_cache.add(make_draft()) is True
        await loaded_cache.wait_for_background_tasks()

        assert len(loaded_cache.records) == 3
        assert notifier.errors == []

    @pytest.mark.asyncio
    async def test_add_returns_before_alert_check_finishes(self, loaded_cache, store):
        store.alert_gate = asyncio.Event()

        added = await asyncio.wait_for(loaded_cache.add(make_draft("Coffee")), timeout=1)

        assert added is True
        assert loaded_cache.records[0].title == "Coffee"
        assert not store.alert_gate.is_set()

        store.alert_gate.set()
        await loaded_cache.wait_for_background_tasks()
        assert "check_alerts" in store.calls

    @pytest.mark.asyncio
    async def test_successive_adds_stack_newest_first(self, loaded_cache):
        for title in ("Coffee", "Bagel", "Juice"):
            assert await loaded_cache.add(make_draft(title)) is True

        await loaded_cache.wait_for_background_tasks()

        assert [t.title for t in loaded_cache.records] == [
            "Juice",
            "Bagel",
            "Coffee",
            "Second",
            "First",
        ]


# =============================================================================
# Update / Delete Tests
# =============================================================================

class TestUpdate:

    @pytest.mark.asyncio
    async def test_update_replaces_matching_record_in_place(self, loaded_cache, notifier):
        edited = replace(loaded_cache.records[1], title="Renamed")

        await loaded_cache.update(edited)

        assert [t.title for t in loaded_cache.records] == ["Second", "Renamed"]
        assert notifier.successes == [UPDATED_MESSAGE]

    @pytest.mark.asyncio
    async def test_failed_update_reports_server_message(self, loaded_cache, store, notifier):
        before = loaded_cache.records
        store.fail_next = StoreRequestException("Validation failed", status_code=400)

        await loaded_cache.update(replace(before[0], title=""))

        assert loaded_cache.records == before
        assert notifier.errors == ["Validation failed"]

    @pytest.mark.asyncio
    async def test_update_without_credential_is_noop(self, cache, store):
        await cache.update(make_transaction("t1"))

        assert store.calls == []


class TestDelete:

    @pytest.mark.asyncio
    async def test_delete_removes_record(self, loaded_cache, notifier):
        await loaded_cache.delete("t2")

        assert [t.id for t in loaded_cache.records] == ["t1"]
        assert notifier.successes == [DELETED_MESSAGE]

    @pytest.mark.asyncio
    async def test_failed_delete_keeps_record(self, loaded_cache, notifier):
        await loaded_cache.delete("missing")

        assert [t.id for t in loaded_cache.records] == ["t2", "t1"]
        assert notifier.errors == ["Transaction not found"]

    @pytest.mark.asyncio
    async def test_delete_without_credential_is_noop(self, cache, store):
        await cache.delete("t1")

        assert store.calls == []


# =============================================================================
# Listener Tests
# =============================================================================

class TestListeners:

    @pytest.mark.asyncio
    async def test_listeners_see_loading_then_records(self, cache, store, credential):
        store.seed(credential, make_transaction("a"))
        snapshots = []
        cache.subscribe(snapshots.append)

        await cache.load(credential)

        assert [s.loading for s in snapshots] == [True, False]
        assert [t.id for t in snapshots[-1].records] == ["a"]

    @pytest.mark.asyncio
    async def test_unsubscribe_stops_notifications(self, loaded_cache):
        snapshots = []
        unsubscribe = loaded_cache.subscribe(snapshots.append)
        unsubscribe()

        await loaded_cache.delete("t1")

        assert snapshots == []

    @pytest.mark.asyncio
    async def test_records_snapshot_is_immutable(self, loaded_cache):
        records = loaded_cache.records

        await loaded_cache.delete("t1")

        assert [t.id for t in records] == ["t2", "t1"]
