"""Failures surfaced by the learning log client."""


class LogServiceError(Exception):
    """Base class for every failure the client reports to the user."""

    def __init__(self, message='Something went wrong.'):
        super().__init__(message)
        self.message = message


class NetworkError(LogServiceError):
    """The backend could not be reached or answered with a server error."""


class RequestTimeoutError(NetworkError):
    """The backend did not answer within the request timeout."""


class NotFoundError(LogServiceError):
    """The entry does not exist in the store that was asked for it."""


class UnauthorizedError(LogServiceError):
    """The session credential was rejected; the user has to log in again."""


class ValidationError(LogServiceError):
    """The backend rejected the payload."""


class StorageError(LogServiceError):
    """The local snapshot could not be written."""


class MalformedResponseError(NetworkError):
    """The backend accepted the request but its answer could not be read."""
