"""Authentication endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from fintrack.application.dto import AuthResult, RegisterRequest
from fintrack.application.services import AuthService
from fintrack.core.dependencies import get_auth_service, get_bearer_token
from fintrack.domain.exceptions import AuthenticationException
from fintrack.presentation.schemas import (
    AuthResponseSchema,
    ErrorResponseSchema,
    LoginRequestSchema,
    RegisterRequestSchema,
)

auth_router = APIRouter(prefix="/auth")


def _to_schema(result: AuthResult) -> AuthResponseSchema:
    return AuthResponseSchema(token=result.token, user=result.user.to_dict())


@auth_router.post(
    "/register",
    response_model=AuthResponseSchema,
    status_code=201,
    summary="Register",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        409: {"model": ErrorResponseSchema, "description": "Email already registered"},
    },
)
async def register(
    request: RegisterRequestSchema,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponseSchema:
    result = await auth_service.register(
        RegisterRequest(name=request.name, email=request.email, password=request.password)
    )
    return _to_schema(result)


@auth_router.post(
    "/login",
    response_model=AuthResponseSchema,
    summary="Log In",
    responses={
        401: {"model": ErrorResponseSchema, "description": "Invalid email or password"},
    },
)
async def login(
    request: LoginRequestSchema,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponseSchema:
    result = await auth_service.login(request.email, request.password)
    return _to_schema(result)


@auth_router.post(
    "/logout",
    status_code=204,
    summary="Log Out",
    description="Revoke the bearer token used for this request.",
)
async def logout(
    token: Annotated[str | None, Depends(get_bearer_token)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> Response:
    if not token:
        raise AuthenticationException()
    await auth_service.logout(token)
    return Response(status_code=204)
