"""
Domain errors raised by the service layer.

Routers translate these into HTTP responses (see ``to_http_exception``).
"""
from fastapi import HTTPException, status


class BakeryError(Exception):
    """Base class for errors the API knows how to report"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(BakeryError):
    status_code = status.HTTP_404_NOT_FOUND


class ValidationError(BakeryError):
    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(BakeryError):
    status_code = status.HTTP_401_UNAUTHORIZED


class PermissionDeniedError(BakeryError):
    status_code = status.HTTP_403_FORBIDDEN


class ConfigurationError(BakeryError):
    """A required secret or setting is missing on the server"""


class StorageNotConfiguredError(BakeryError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


def to_http_exception(error: BakeryError) -> HTTPException:
    return HTTPException(status_code=error.status_code, detail=error.message)
