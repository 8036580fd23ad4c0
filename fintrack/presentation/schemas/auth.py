"""Authentication Pydantic schemas."""

from pydantic import BaseModel, Field, field_validator


class RegisterRequestSchema(BaseModel):
    """Schema for POST /api/auth/register request body."""

    name: str = Field(..., min_length=1, max_length=255, examples=["Ada"])
    email: str = Field(..., min_length=3, max_length=255, examples=["ada@example.com"])
    password: str = Field(..., min_length=6, max_length=128)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Require something that looks like an address."""
        v = v.strip()
        if "@" not in v:
            raise ValueError("email must contain @")
        return v


class LoginRequestSchema(BaseModel):
    """Schema for POST /api/auth/login request body."""

    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class UserSchema(BaseModel):
    name: str
    email: str


class AuthResponseSchema(BaseModel):
    """Schema for successful login and registration."""

    token: str = Field(..., description="Bearer token for subsequent requests")
    user: UserSchema
