"""Domain exceptions raised by services and rendered by the API layer."""

from typing import Any


class CinemaError(Exception):
    """Base error carrying the HTTP status it maps to and extra response fields."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None, **extra: Any) -> None:
        self.message = message or self.message
        self.extra = extra
        super().__init__(self.message)


class InvalidRequestError(CinemaError):
    status_code = 400
    message = "Invalid request"


class NotAuthenticatedError(CinemaError):
    status_code = 401
    message = "Not authenticated"


class ForbiddenError(CinemaError):
    status_code = 403
    message = "Access denied"


class NotFoundError(CinemaError):
    status_code = 404
    message = "Not found"


class ConflictError(CinemaError):
    status_code = 409
    message = "Conflict"


class SeatAlreadyReservedError(ConflictError):
    message = "Seat already reserved"


class UsernameTakenError(ConflictError):
    message = "Username already exists"


class StoreError(CinemaError):
    """A database failure or timeout. The cause is only shown in development mode."""

    status_code = 500
    message = "Database operation failed"
