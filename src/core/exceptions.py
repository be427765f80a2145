"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"

    # Authorization errors (403)
    FORBIDDEN = "FORBIDDEN"

    # Not found errors (404)
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    EXPERIENCE_NOT_FOUND = "EXPERIENCE_NOT_FOUND"
    EDUCATION_NOT_FOUND = "EDUCATION_NOT_FOUND"
    ENRICHMENT_UNAVAILABLE = "ENRICHMENT_UNAVAILABLE"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_IDENTIFIER = "INVALID_IDENTIFIER"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class ValidationFailure(AppException):
    """One or more input fields are missing or malformed.

    ``details`` is always a list of ``{"field": ..., "message": ...}`` records so
    that domain-level checks and request-schema checks look the same to clients.
    """

    def __init__(self, errors: list[dict[str, str]]) -> None:
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message="Request validation failed",
            status_code=400,
            details=errors,
        )
        self.errors = errors

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationFailure":
        """Build a failure for a single field."""
        return cls([{"field": field, "message": message}])


class InvalidIdentifierError(AppException):
    """Identifier is not syntactically valid; raised before any lookup."""

    def __init__(self, value: str, kind: str = "user") -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_IDENTIFIER,
            message=f"Invalid {kind} ID",
            status_code=400,
            details={"value": value},
        )


class ProfileNotFoundError(AppException):
    """No profile exists for the owner."""

    def __init__(self, owner_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message="There is no profile for this user",
            status_code=404,
            details={"owner_id": owner_id},
        )


class SubDocumentNotFound(AppException):
    """No embedded entry matches the identifier."""

    def __init__(
        self,
        entry_id: str,
        error_code: ErrorCode = ErrorCode.EXPERIENCE_NOT_FOUND,
        label: str = "Entry",
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=f"{label} not found: {entry_id}",
            status_code=404,
            details={"entry_id": entry_id},
        )


class ExperienceNotFoundError(SubDocumentNotFound):
    """Experience entry not found."""

    def __init__(self, entry_id: str) -> None:
        super().__init__(entry_id, ErrorCode.EXPERIENCE_NOT_FOUND, "Experience")


class EducationNotFoundError(SubDocumentNotFound):
    """Education entry not found."""

    def __init__(self, entry_id: str) -> None:
        super().__init__(entry_id, ErrorCode.EDUCATION_NOT_FOUND, "Education")


class EnrichmentUnavailableError(AppException):
    """External repository lookup failed for any reason."""

    def __init__(self, handle: str) -> None:
        super().__init__(
            error_code=ErrorCode.ENRICHMENT_UNAVAILABLE,
            message="No Github profile found",
            status_code=404,
            details={"username": handle},
        )


class StoreFailureError(AppException):
    """Unexpected persistence error. Internal detail is never exposed."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            error_code=ErrorCode.DATABASE_ERROR,
            message="Server error",
            status_code=500,
            details={"operation": operation},
        )
