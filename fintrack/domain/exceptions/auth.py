"""Authentication-related domain exceptions."""

from .base import DomainException


class AuthenticationException(DomainException):
    """Raised when a request carries no usable bearer token."""

    def __init__(self, message: str = "Not authorized, no token"):
        super().__init__(
            message=message,
            code="NOT_AUTHORIZED",
        )


class InvalidCredentialsException(DomainException):
    """Raised when an email/password pair does not match an account."""

    def __init__(self):
        super().__init__(
            message="Invalid email or password",
            code="INVALID_CREDENTIALS",
        )


class UserAlreadyExistsException(DomainException):
    """Raised when registering an email that is already taken."""

    def __init__(self, email: str):
        super().__init__(
            message="User already exists",
            code="USER_ALREADY_EXISTS",
        )
        self.email = email
