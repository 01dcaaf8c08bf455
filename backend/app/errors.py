"""Error kinds shared by the services, the query engine and the HTTP layer."""

from __future__ import annotations

import enum

from fastapi import status


class ErrorKind(str, enum.Enum):
    """Enumerable failure categories reported in the error envelope."""

    INVALID_PARAMETER = "INVALID_PARAMETER"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNKNOWN_CALLER = "UNKNOWN_CALLER"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    INVALID_TOKEN = "INVALID_TOKEN"
    ACCESS_DENIED = "ACCESS_DENIED"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    FILTER_PARSE_FAILURE = "FILTER_PARSE_FAILURE"
    STORE_FAILURE = "STORE_FAILURE"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


HTTP_STATUS_BY_KIND = {
    ErrorKind.INVALID_PARAMETER: 422,
    ErrorKind.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNKNOWN_CALLER: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INVALID_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.ACCESS_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.FILTER_PARSE_FAILURE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.STORE_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.INTERNAL_SERVER_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ServiceError(Exception):
    """Base class for failures reported to API callers."""

    kind: ErrorKind = ErrorKind.INTERNAL_SERVER_ERROR

    def __init__(self, message: str, *, details: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    @property
    def status_code(self) -> int:
        return HTTP_STATUS_BY_KIND[self.kind]


class ValidationError(ServiceError):
    """Raised when a payload passes schema validation but breaks a business rule."""

    kind = ErrorKind.VALIDATION_ERROR

    def __init__(self, message: str, errors: dict[str, list[str]] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or {}


class UnknownCallerError(ServiceError):
    """Raised when the authenticated subject no longer maps to a user."""

    kind = ErrorKind.UNKNOWN_CALLER


class InvalidCredentialsError(ServiceError):
    kind = ErrorKind.INVALID_CREDENTIALS


class InvalidTokenError(ServiceError):
    kind = ErrorKind.INVALID_TOKEN


class AccessDeniedError(ServiceError):
    kind = ErrorKind.ACCESS_DENIED


class NotFoundError(ServiceError):
    kind = ErrorKind.NOT_FOUND


class ConflictError(ServiceError):
    kind = ErrorKind.CONFLICT


class FilterParseError(ServiceError):
    """Raised when a filter string cannot be parsed as a whole."""

    kind = ErrorKind.FILTER_PARSE_FAILURE


class QueryStoreError(ServiceError):
    """Raised when the backing store fails while counting or fetching a page."""

    kind = ErrorKind.STORE_FAILURE
