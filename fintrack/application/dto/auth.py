"""Data transfer objects for authentication operations."""

from dataclasses import dataclass
from typing import List

from fintrack.domain.entities import UserProfile


@dataclass(frozen=True)
class RegisterRequest:
    """Input data for creating an account."""

    name: str
    email: str
    password: str

    MIN_PASSWORD_LENGTH = 6

    def validate(self) -> List[str]:
        errors = []

        if not self.name or not self.name.strip():
            errors.append("name is required")

        if not self.email or "@" not in self.email:
            errors.append("a valid email is required")

        if not self.password or len(self.password) < self.MIN_PASSWORD_LENGTH:
            errors.append(
                f"password must be at least {self.MIN_PASSWORD_LENGTH} characters"
            )

        return errors


@dataclass(frozen=True)
class AuthResult:
    """Issued token and the profile it belongs to."""

    token: str
    user: UserProfile

    def to_dict(self) -> dict:
        return {"token": self.token, "user": self.user.to_dict()}
