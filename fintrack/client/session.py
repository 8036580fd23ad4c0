"""Client-side authentication session with persistence across restarts."""

import json
import os
from pathlib import Path
from typing import Awaitable, Callable, List, Optional

import structlog

from fintrack.core.config import settings
from fintrack.domain.entities import Credential, UserProfile
from fintrack.domain.exceptions import DomainException
from fintrack.infrastructure.clients import HttpAuthClient

from .notifier import LogNotifier, Notifier

logger = structlog.get_logger(__name__)

CredentialListener = Callable[[Optional[Credential]], Awaitable[None]]


class FileSessionStorage:
    """
    Keeps the current credential in a small JSON file.

    Plays the part browser local storage plays for a web client: the token
    and the user profile are written together and only restored together.
    """

    def __init__(self, path: str | Path | None = None):
        self._path = Path(path or settings.session_file)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Optional[Credential]:
        """Return the stored credential, or None if absent or unreadable."""
        if not self._path.exists():
            return None

        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            token = data.get("authToken")
            user = data.get("user")
            if not token or not user:
                return None
            return Credential(token=token, user=UserProfile.from_dict(user))
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error("session_restore_failed", path=str(self._path), error=str(e))
            return None

    def save(self, credential: Credential) -> None:
        payload = {"authToken": credential.token, "user": credential.user.to_dict()}
        try:
            self._path.write_text(json.dumps(payload), encoding="utf-8")
            os.chmod(self._path, 0o600)
        except OSError as e:
            logger.error("session_persist_failed", path=str(self._path), error=str(e))

    def clear(self) -> None:
        try:
            self._path.unlink(missing_ok=True)
        except OSError as e:
            logger.error("session_clear_failed", path=str(self._path), error=str(e))


class AuthSession:
    """
    Holds the credential of the signed-in user.

    Listeners are awaited, in subscription order, every time the credential
    changes (login, signup, logout, restore). Each change produces a new
    Credential object, so identity comparison detects re-logins.
    """

    def __init__(
        self,
        auth_client: HttpAuthClient | None = None,
        notifier: Notifier | None = None,
        storage: FileSessionStorage | None = None,
    ):
        self._auth_client = auth_client or HttpAuthClient()
        self._notifier = notifier or LogNotifier()
        self._storage = storage
        self._credential: Optional[Credential] = None
        self._is_loading = True
        self._listeners: List[CredentialListener] = []

    @property
    def credential(self) -> Optional[Credential]:
        return self._credential

    @property
    def token(self) -> Optional[str]:
        return self._credential.token if self._credential else None

    @property
    def user(self) -> Optional[UserProfile]:
        return self._credential.user if self._credential else None

    @property
    def is_authenticated(self) -> bool:
        return self._credential is not None

    @property
    def is_loading(self) -> bool:
        """True until restore() has run once."""
        return self._is_loading

    def subscribe(self, listener: CredentialListener) -> Callable[[], None]:
        """Register a listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def restore(self) -> Optional[Credential]:
        """
        Load the persisted credential and announce it.

        None is announced when nothing was persisted, so listeners learn the
        session is signed out.
        """
        credential = self._storage.load() if self._storage else None
        self._is_loading = False

        if credential is not None:
            logger.info("session_restored")
        await self._set_credential(credential)

        return credential

    async def login(self, email: str, password: str) -> bool:
        try:
            credential = await self._auth_client.login(email, password)
        except DomainException as e:
            self._notifier.error(e.message or "Login failed.")
            return False

        await self._establish(credential)
        return True

    async def signup(self, name: str, email: str, password: str) -> bool:
        try:
            credential = await self._auth_client.register(name, email, password)
        except DomainException as e:
            self._notifier.error(e.message or "Signup failed.")
            return False

        await self._establish(credential)
        return True

    async def logout(self) -> None:
        """
        Forget the credential locally and ask the server to revoke it.

        Revocation is best effort; the local session ends either way.
        """
        credential = self._credential
        if self._storage:
            self._storage.clear()
        await self._set_credential(None)

        if credential is not None:
            try:
                await self._auth_client.logout(credential)
            except DomainException as e:
                logger.warning("token_revoke_failed", error=e.message)

    async def _establish(self, credential: Credential) -> None:
        if self._storage:
            self._storage.save(credential)
        await self._set_credential(credential)

    async def _set_credential(self, credential: Optional[Credential]) -> None:
        self._credential = credential
        for listener in list(self._listeners):
            await listener(credential)
