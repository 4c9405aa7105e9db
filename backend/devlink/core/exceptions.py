"""
Custom Exceptions for DevLink
=============================

Every failure surfaced to a caller is one of five kinds:

    ValidationError  (400) - missing/malformed input, rejected before storage
    Unauthorized     (401) - no valid session where one is required
    NotFound         (404) - absent OR present-but-not-owned (never distinguished)
    Conflict         (409) - unique-constraint races, retried internally
    InternalError    (500) - unexpected storage/rendering failure

Usage:
    from devlink.core.exceptions import PortfolioNotFoundError, StorageError

    if not portfolio:
        raise PortfolioNotFoundError(portfolio_id)

    try:
        await db.commit()
    except SQLAlchemyError as e:
        raise StorageError("replace") from e
"""

from typing import Optional, Any, Dict


class DevLinkError(Exception):
    """Base exception for all DevLink errors"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


# ============================================
# Validation Errors (400-type)
# ============================================

class ValidationError(DevLinkError):
    """Input validation failed"""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class InvalidExportFormatError(ValidationError):
    """Export format is not one of the supported ones"""

    def __init__(self, fmt: Any, allowed: tuple):
        super().__init__("Invalid format", field="format")
        self.code = "INVALID_FORMAT"
        self.details.update({"format": fmt, "allowed_formats": list(allowed)})


# ============================================
# Authentication Errors (401-type)
# ============================================

class AuthenticationError(DevLinkError):
    """No valid session"""

    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, code="UNAUTHORIZED")


class InvalidCredentialsError(AuthenticationError):
    """Email/password pair rejected by the credentials provider"""

    def __init__(self):
        super().__init__("Invalid email or password")
        self.code = "INVALID_CREDENTIALS"


# ============================================
# Resource Errors (404-type)
# ============================================

class ResourceNotFoundError(DevLinkError):
    """Base class for not found errors"""

    status_code = 404

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} not found",
            code=f"{resource_type.upper()}_NOT_FOUND",
            details={"resource_type": resource_type, "resource_id": resource_id}
        )


class PortfolioNotFoundError(ResourceNotFoundError):
    """Portfolio missing, private, or owned by someone else"""

    def __init__(self, portfolio_ref: str):
        super().__init__("Portfolio", portfolio_ref)


# ============================================
# Conflict Errors (409-type)
# ============================================

class ConflictError(DevLinkError):
    """Unique constraint violated"""

    status_code = 409

    def __init__(self, message: str):
        super().__init__(message, code="CONFLICT")


class SlugConflictError(ConflictError):
    """Another portfolio claimed the slug between the probe and the insert"""

    def __init__(self, slug: str):
        super().__init__(f"Slug '{slug}' is already taken")
        self.code = "SLUG_CONFLICT"
        self.details["slug"] = slug


# ============================================
# Internal Errors (500-type)
# ============================================

class InternalError(DevLinkError):
    """Unexpected failure; the cause is logged, never returned"""

    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message, code="INTERNAL_ERROR")


class StorageError(InternalError):
    """Database operation failed"""

    def __init__(self, operation: str):
        super().__init__()
        self.code = "STORAGE_ERROR"
        self.details["operation"] = operation


class SlugAllocationError(InternalError):
    """No free slug within the probe limit"""

    def __init__(self, base_slug: str, attempts: int):
        super().__init__()
        self.code = "SLUG_ALLOCATION_FAILED"
        self.details = {"base_slug": base_slug, "attempts": attempts}


class ExportError(InternalError):
    """Document rendering failed"""

    def __init__(self, fmt: str):
        super().__init__("Failed to export portfolio")
        self.code = "EXPORT_FAILED"
        self.details["format"] = fmt


# ============================================
# Helper function for API responses
# ============================================

def error_response(error: DevLinkError) -> Dict[str, Any]:
    """Convert exception to API error response format"""
    return {
        "success": False,
        "message": error.message,
        "error": error.to_dict()
    }
