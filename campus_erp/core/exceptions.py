"""
Custom Exceptions for Campus ERP
================================

Use these instead of generic Exception to:
1. Make errors more specific and debuggable
2. Enable proper error handling at API layer
3. Provide meaningful error messages to users

Usage:
    from campus_erp.core.exceptions import ProfileNotFoundError, MissingParameterError

    if not user_id:
        raise MissingParameterError("user_id")

    try:
        profile = await resolver.resolve_student(user_id)
    except ProfileNotFoundError:
        ...
"""

import traceback
from datetime import datetime, timezone
from typing import Optional, Any, Dict


class CampusERPError(Exception):
    """Base exception for all Campus ERP errors"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        if status_code is not None:
            self.status_code = status_code
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

class ValidationError(CampusERPError):
    """Input validation failed"""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class MissingParameterError(ValidationError):
    """A required query parameter was not supplied"""

    def __init__(self, parameter: str):
        super().__init__(f"{parameter} is required", field=parameter)
        self.code = "MISSING_PARAMETER"


class DuplicateRecordError(ValidationError):
    """A unique value is already taken"""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, field=field)
        self.code = "DUPLICATE_ENTRY"


# ============================================
# Resource Errors (404-type)
# ============================================

class ResourceNotFoundError(CampusERPError):
    """Base class for not found errors"""

    status_code = 404

    def __init__(self, resource_type: str, resource_id: Optional[str] = None,
                 message: Optional[str] = None):
        super().__init__(
            message or f"{resource_type} not found",
            code=f"{resource_type.upper().replace(' ', '_')}_NOT_FOUND",
            details={"resource_type": resource_type, "resource_id": resource_id}
        )


class ProfileNotFoundError(ResourceNotFoundError):
    """No role-specific profile row exists for the user"""

    def __init__(self, role: str, user_id: str):
        super().__init__(
            f"{role.capitalize()} profile",
            user_id,
            message=f"{role.capitalize()} profile not found"
        )
        self.code = "PROFILE_NOT_FOUND"
        self.details["role"] = role


# ============================================
# Hosted Database Errors (500-type)
# ============================================

class DatabaseError(CampusERPError):
    """The hosted database (PostgREST / GoTrue) rejected or failed a request"""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Any] = None,
        hint: Optional[str] = None,
        http_status: Optional[int] = None
    ):
        super().__init__(message, code=code or "DATABASE_ERROR")
        self.hint = hint
        self.http_status = http_status
        if details:
            self.details["upstream_details"] = details
        if hint:
            self.details["hint"] = hint
        if http_status:
            self.details["http_status"] = http_status


class UpstreamError(CampusERPError):
    """Unexpected hosted database failure on a lookup or write the request depends on"""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        details = {}
        if cause is not None:
            details["reason"] = str(cause)
            details["cause_type"] = type(cause).__name__
            if isinstance(cause, CampusERPError):
                details["cause_code"] = cause.code
        super().__init__(message, code="UPSTREAM_ERROR", details=details)


class EnrichmentError(CampusERPError):
    """
    A best-effort secondary lookup failed.

    Only ever logged: the field group it feeds resolves to null.
    """

    def __init__(self, lookup: str, cause: BaseException):
        super().__init__(
            f"Enrichment lookup '{lookup}' failed: {cause}",
            code="ENRICHMENT_FAILED",
            details={"lookup": lookup, "cause_type": type(cause).__name__}
        )


# ============================================
# Rate limiting
# ============================================

class RateLimitError(CampusERPError):
    """Too many requests from one client in the current window"""

    status_code = 429

    def __init__(self, limit: Optional[str] = None):
        super().__init__(
            "Too many requests, please try again later.",
            code="RATE_LIMIT_EXCEEDED",
            details={"limit": limit} if limit else None
        )


# ============================================
# Helper function for API responses
# ============================================

def error_response(error: CampusERPError, path: str = "", debug: bool = False) -> Dict[str, Any]:
    """Convert exception to API error response format"""
    body: Dict[str, Any] = {"code": error.code, "message": error.message}
    if debug:
        body["details"] = error.details
        if error.__traceback__ is not None:
            body["stack"] = "".join(
                traceback.format_exception(type(error), error, error.__traceback__)
            )
    return {
        "success": False,
        "message": error.message,
        "error": body,
        "meta": {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "path": path,
        },
    }
