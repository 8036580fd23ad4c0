"""User and session credential entities."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4


@dataclass
class User:
    """A registered account. The password hash never leaves the backend."""

    name: str
    email: str
    password_hash: str
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def profile(self) -> "UserProfile":
        return UserProfile(name=self.name, email=self.email)


@dataclass(frozen=True)
class UserProfile:
    """Public part of a user, shared with clients."""

    name: str
    email: str

    def to_dict(self) -> dict:
        return {"name": self.name, "email": self.email}

    @classmethod
    def from_dict(cls, data: dict) -> "UserProfile":
        return cls(name=data["name"], email=data["email"])


@dataclass(frozen=True, eq=False)
class Credential:
    """
    Bearer token plus the profile of the session it belongs to.

    Compared by identity: a re-login yields a new credential even when the
    token string happens to match, so consumers can detect session changes.
    """

    token: str
    user: UserProfile

    @property
    def authorization_header(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"}

    def to_dict(self) -> dict:
        return {"token": self.token, "user": self.user.to_dict()}
