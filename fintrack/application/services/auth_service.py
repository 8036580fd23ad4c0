"""Auth service - registration, login and bearer token resolution."""

import secrets

import bcrypt
import structlog

from fintrack.core.config import settings
from fintrack.domain.entities import User
from fintrack.domain.exceptions import (
    AuthenticationException,
    InvalidCredentialsException,
    InvalidRequestException,
    UserAlreadyExistsException,
)
from fintrack.domain.interfaces import AuthTokenRepository, UserRepository
from fintrack.application.dto import AuthResult, RegisterRequest

logger = structlog.get_logger(__name__)


class AuthService:
    """
    Application service for account use cases.

    Passwords are stored as bcrypt hashes; sessions are opaque random
    tokens persisted server-side so they can be revoked.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        token_repository: AuthTokenRepository,
        bcrypt_rounds: int | None = None,
    ):
        self._user_repo = user_repository
        self._token_repo = token_repository
        self._rounds = bcrypt_rounds or settings.bcrypt_rounds

    async def register(self, request: RegisterRequest) -> AuthResult:
        """
        Create an account and open a session for it.

        Raises:
            InvalidRequestException: If a field is missing or too short
            UserAlreadyExistsException: If the email is taken
        """
        errors = request.validate()
        if errors:
            raise InvalidRequestException("; ".join(errors))

        email = request.email.strip().lower()
        if await self._user_repo.get_by_email(email) is not None:
            logger.info("registration_rejected", reason="email_taken")
            raise UserAlreadyExistsException(email)

        password_hash = bcrypt.hashpw(
            request.password.encode("utf-8"),
            bcrypt.gensalt(rounds=self._rounds),
        ).decode("utf-8")

        user = await self._user_repo.save(
            User(name=request.name.strip(), email=email, password_hash=password_hash)
        )
        logger.info("user_registered", user_id=user.id)

        return await self._issue_token(user)

    async def login(self, email: str, password: str) -> AuthResult:
        """
        Verify an email/password pair and open a session.

        Raises:
            InvalidCredentialsException: If no account matches
        """
        user = await self._user_repo.get_by_email((email or "").strip())

        if user is None or not bcrypt.checkpw(
            (password or "").encode("utf-8"),
            user.password_hash.encode("utf-8"),
        ):
            logger.info("login_failed")
            raise InvalidCredentialsException()

        logger.info("user_logged_in", user_id=user.id)
        return await self._issue_token(user)

    async def authenticate(self, token: str | None) -> User:
        """
        Resolve a bearer token to its user.

        Raises:
            AuthenticationException: If the token is missing, unknown or revoked
        """
        if not token:
            raise AuthenticationException()

        user_id = await self._token_repo.get_user_id(token)
        user = await self._user_repo.get_by_id(user_id) if user_id else None

        if user is None:
            raise AuthenticationException("Not authorized, token failed")

        return user

    async def logout(self, token: str) -> None:
        await self._token_repo.revoke(token)
        logger.info("session_revoked")

    async def _issue_token(self, user: User) -> AuthResult:
        token = secrets.token_urlsafe(settings.auth_token_bytes)
        await self._token_repo.save(token, user.id)
        return AuthResult(token=token, user=user.profile())
