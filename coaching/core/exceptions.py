from typing import Any, Optional

from fastapi import HTTPException, status


class ERPException(HTTPException):
    """Base for service-level failures; carries a stable error code for clients."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: str = "INTERNAL_SERVER_ERROR"
    default_detail: str = "An unexpected error occurred"

    def __init__(self, detail: Optional[Any] = None, headers: Optional[dict] = None):
        super().__init__(status_code=self.status_code, detail=detail or self.default_detail, headers=headers)


class NotFoundException(ERPException):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"
    default_detail = "Resource not found."


class InvalidStateException(ERPException):
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "INVALID_STATE"
    default_detail = "Operation not allowed in the current state."


class AlreadySubmittedException(ERPException):
    status_code = status.HTTP_409_CONFLICT
    error_code = "ALREADY_SUBMITTED"
    default_detail = "You have already submitted this exam."


class NoActiveAttemptException(ERPException):
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "NO_ACTIVE_ATTEMPT"
    default_detail = "No active attempt found to submit."


class UnauthorizedException(ERPException):
    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "UNAUTHORIZED"
    default_detail = "Could not validate credentials"

    def __init__(self, detail: Optional[Any] = None):
        super().__init__(detail=detail, headers={"WWW-Authenticate": "Bearer"})


class ForbiddenException(ERPException):
    status_code = status.HTTP_403_FORBIDDEN
    error_code = "FORBIDDEN"
    default_detail = "You do not have permission to perform this action."


class ConflictException(ERPException):
    status_code = status.HTTP_409_CONFLICT
    error_code = "CONFLICT"
    default_detail = "Resource already exists."
