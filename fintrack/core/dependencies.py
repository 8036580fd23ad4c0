"""Dependency injection for FastAPI."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.domain.entities import User
from fintrack.infrastructure.database import get_db_session
from fintrack.infrastructure.repositories import (
    PostgresAuthTokenRepository,
    PostgresBudgetRepository,
    PostgresTransactionRepository,
    PostgresUserRepository,
)
from fintrack.infrastructure.clients import HttpGenerativeAIClient
from fintrack.application.services import (
    AIService,
    AuthService,
    BudgetService,
    TransactionService,
)

bearer_scheme = HTTPBearer(auto_error=False)


# Repository dependencies
async def get_user_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresUserRepository:
    """Get a UserRepository instance."""
    return PostgresUserRepository(session)


async def get_token_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresAuthTokenRepository:
    """Get an AuthTokenRepository instance."""
    return PostgresAuthTokenRepository(session)


async def get_transaction_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresTransactionRepository:
    """Get a TransactionRepository instance."""
    return PostgresTransactionRepository(session)


async def get_budget_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresBudgetRepository:
    """Get a BudgetRepository instance."""
    return PostgresBudgetRepository(session)


# External client dependencies
def get_ai_client() -> HttpGenerativeAIClient:
    """Get an AIProviderClient instance."""
    return HttpGenerativeAIClient()


# Service dependencies
async def get_auth_service(
    user_repo: Annotated[PostgresUserRepository, Depends(get_user_repository)],
    token_repo: Annotated[PostgresAuthTokenRepository, Depends(get_token_repository)],
) -> AuthService:
    """Get an AuthService instance."""
    return AuthService(user_repository=user_repo, token_repository=token_repo)


async def get_transaction_service(
    transaction_repo: Annotated[
        PostgresTransactionRepository, Depends(get_transaction_repository)
    ],
) -> TransactionService:
    """Get a TransactionService instance."""
    return TransactionService(transaction_repository=transaction_repo)


async def get_budget_service(
    budget_repo: Annotated[PostgresBudgetRepository, Depends(get_budget_repository)],
    transaction_repo: Annotated[
        PostgresTransactionRepository, Depends(get_transaction_repository)
    ],
) -> BudgetService:
    """Get a BudgetService instance."""
    return BudgetService(
        budget_repository=budget_repo,
        transaction_repository=transaction_repo,
    )


async def get_ai_service(
    transaction_repo: Annotated[
        PostgresTransactionRepository, Depends(get_transaction_repository)
    ],
    ai_client: Annotated[HttpGenerativeAIClient, Depends(get_ai_client)],
) -> AIService:
    """Get an AIService instance with all dependencies."""
    return AIService(transaction_repository=transaction_repo, ai_client=ai_client)


# Auth dependencies
def get_bearer_token(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
) -> str | None:
    """Extract the raw bearer token, if any."""
    return credentials.credentials if credentials else None


async def get_current_user(
    token: Annotated[str | None, Depends(get_bearer_token)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> User:
    """Resolve the authenticated user or fail with 401."""
    return await auth_service.authenticate(token)
