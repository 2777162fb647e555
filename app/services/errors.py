"""Typed failures raised by the user service and its policies."""


class UserServiceError(Exception):
    """Base class for user service failures. Routes map each subclass to a status code."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ForbiddenError(UserServiceError):
    """Requester's role or identity does not permit the operation."""


class InvalidInputError(UserServiceError):
    """Missing or out-of-range field values (e.g. unknown role, blank username)."""


class NotFoundError(UserServiceError):
    """Target id has no corresponding user. Only raised after permission checks pass."""


class StoreFailureError(UserServiceError):
    """The user store failed (e.g. database unavailable). Never retried here."""
