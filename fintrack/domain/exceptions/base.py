"""Base domain exception."""


class DomainException(Exception):
    """
    Base exception for all domain-level errors.

    `message` is safe to show to an end user; `code` is a stable
    machine-readable identifier used in API error bodies.
    """

    def __init__(self, message: str, code: str = "DOMAIN_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.code, "message": self.message}
