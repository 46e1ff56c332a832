"""Service-layer errors mapped to HTTP responses and GraphQL results."""


class ServiceError(Exception):
    """Base class for errors a caller is expected to handle."""

    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class InvalidInput(ServiceError):
    """Raised when request data fails validation."""

    status_code = 400

    def __init__(self, errors: list[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


class NotFound(ServiceError):
    """Raised when a requested record does not exist."""

    status_code = 404


class Conflict(ServiceError):
    """Raised when a write would violate a uniqueness or reference rule."""

    status_code = 409
