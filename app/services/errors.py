"""Service-level errors. Routers translate these into HTTP responses."""


class ServiceError(Exception):
    """Base class for expected, caller-facing service failures."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationFailed(ServiceError):
    """Raised when input is well-formed JSON but violates a field rule.

    errors maps a field name (as the caller sent it) to its messages.
    """

    def __init__(self, errors: dict[str, list[str]], message: str = "The given data was invalid.") -> None:
        self.errors = errors
        super().__init__(message)

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationFailed":
        return cls({field: [message]})


class AuthorizationError(ServiceError):
    """Raised when the caller lacks ownership or the Administrator role."""


class NotFoundError(ServiceError):
    """Raised when a referenced record does not exist or is soft-deleted."""
