# backend/app/core/exceptions.py
"""
Domain-specific exceptions for the SkillBridge tutoring platform.

These exceptions carry the human-readable message that ends up in the
``error`` field of the API envelope. Routes convert them with
``to_http_exception()``; ``app.errors`` renders the final JSON body.
"""

from typing import Any, Optional

from fastapi import HTTPException, status


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Any] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details
        super().__init__(self.message)

    def to_http_exception(self) -> HTTPException:
        detail: dict[str, Any] = {"message": self.message, "code": self.code}
        if self.details is not None:
            detail["details"] = self.details
        return HTTPException(status_code=self.status_code, detail=detail)


class ValidationException(DomainException):
    """Raised when business validation fails."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationException(DomainException):
    """Raised when credentials or tokens are missing or wrong."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def to_http_exception(self) -> HTTPException:
        exc = super().to_http_exception()
        exc.headers = {"WWW-Authenticate": "Bearer"}
        return exc


class ForbiddenException(DomainException):
    """Raised when user lacks permission for an action."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundException(DomainException):
    """Raised when a requested resource is not found."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictException(DomainException):
    """Raised when there's a conflict with existing data."""

    status_code = status.HTTP_409_CONFLICT


class ServiceException(DomainException):
    """Raised when a service operation fails."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class UpstreamServiceException(DomainException):
    """Raised when a third-party API (Stripe, Zoom) rejects a call."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_502_BAD_GATEWAY,
        details: Optional[Any] = None,
    ) -> None:
        super().__init__(message, details=details)
        self.status_code = status_code


class RepositoryException(Exception):
    """Raised when a data access operation fails."""


class DuplicateRecordException(RepositoryException):
    """Raised when an insert or update violates a unique constraint."""
