"""
Domain exceptions for the mock-test API.

Each error maps to one HTTP status and carries a stable error code so
clients can tell a missing test apart from a storage outage.
"""

from enum import Enum

from fastapi import HTTPException, status


class ErrorCode(str, Enum):
    """Unique error codes."""

    NOT_FOUND = "NOT_FOUND"
    INVALID_INPUT = "INVALID_INPUT"
    SESSION_CLOSED = "SESSION_CLOSED"
    UNAVAILABLE = "UNAVAILABLE"


class APIException(HTTPException):
    """Base class for API errors raised by the service layer."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: ErrorCode,
        headers: dict | None = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code


class NotFoundError(APIException):
    """Raised when a referenced resource does not exist or is inactive."""

    def __init__(self, resource_type: str, resource_id: str | int | None = None):
        detail = f"{resource_type} not found"
        if resource_id is not None:
            detail = f"{resource_type} {resource_id} not found"
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            error_code=ErrorCode.NOT_FOUND,
        )


class InvalidInputError(APIException):
    """Raised when input is rejected before any state is mutated."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code=ErrorCode.INVALID_INPUT,
        )


class SessionClosedError(APIException):
    """Raised when an operation targets a session that is no longer active."""

    def __init__(self, session_status: str):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Session is {session_status}",
            error_code=ErrorCode.SESSION_CLOSED,
        )
        self.session_status = session_status


class UnavailableError(APIException):
    """Raised when storage cannot be reached. Safe to retry."""

    def __init__(self, detail: str = "Storage unavailable"):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=detail,
            error_code=ErrorCode.UNAVAILABLE,
            headers={"Retry-After": "1"},
        )
