"""
Domain exceptions.

Services and adapters raise these; the HTTP layer maps them to responses
through ``backend.app.error_handlers``. Each carries the status code it
surfaces as and a client-safe message.
"""

from .constants import (
    MSG_INVALID_CREDENTIALS,
    MSG_INVALID_GITHUB_USER,
    MSG_NOT_AUTHORIZED,
    MSG_SERVER_ERROR,
)


class DevConnectorError(Exception):
    """Base class for errors that are reported to the client."""

    status_code: int = 400
    default_message: str = "Bad request"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(DevConnectorError):
    """A referenced record does not exist. Some routes report this as 400."""

    status_code = 404
    default_message = "Not found"


class NotAuthorizedError(DevConnectorError):
    """The authenticated actor does not own the record it tried to change."""

    status_code = 401
    default_message = MSG_NOT_AUTHORIZED


class ConflictError(DevConnectorError):
    """The request conflicts with existing state (duplicate email, duplicate like)."""

    status_code = 400
    default_message = "Conflict"


class InvalidCredentialsError(DevConnectorError):
    status_code = 422
    default_message = MSG_INVALID_CREDENTIALS


class GitHubUserNotFound(DevConnectorError):
    status_code = 404
    default_message = MSG_INVALID_GITHUB_USER


class GitHubAPIError(DevConnectorError):
    status_code = 500
    default_message = MSG_SERVER_ERROR


__all__ = [
    "DevConnectorError",
    "NotFoundError",
    "NotAuthorizedError",
    "ConflictError",
    "InvalidCredentialsError",
    "GitHubUserNotFound",
    "GitHubAPIError",
]
