"""PostgreSQL repositories for accounts and their bearer tokens."""

from typing import Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.domain.entities import User
from fintrack.domain.interfaces import AuthTokenRepository, UserRepository
from fintrack.infrastructure.database.models import AuthTokenModel, UserModel


class PostgresUserRepository(UserRepository):
    """PostgreSQL-backed user repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def save(self, user: User) -> User:
        model = UserModel(
            id=user.id,
            name=user.name,
            email=user.email.lower(),
            password_hash=user.password_hash,
            created_at=user.created_at,
        )

        self._session.add(model)
        await self._session.flush()

        return self._to_entity(model)

    async def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(UserModel).where(func.lower(UserModel.email) == email.lower())
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_id(self, user_id: str) -> Optional[User]:
        model = await self._session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def _to_entity(self, model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            password_hash=model.password_hash,
            created_at=model.created_at,
        )


class PostgresAuthTokenRepository(AuthTokenRepository):
    """PostgreSQL-backed bearer token store."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def save(self, token: str, user_id: str) -> None:
        self._session.add(AuthTokenModel(token=token, user_id=user_id))
        await self._session.flush()

    async def get_user_id(self, token: str) -> Optional[str]:
        stmt = select(AuthTokenModel.user_id).where(AuthTokenModel.token == token)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def revoke(self, token: str) -> None:
        await self._session.execute(
            delete(AuthTokenModel).where(AuthTokenModel.token == token)
        )
