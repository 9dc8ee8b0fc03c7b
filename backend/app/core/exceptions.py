"""
Custom exceptions and error handlers for consistent error responses.

Every error body is a JSON object carrying an ``error`` message and a
machine-readable ``error_code``.
"""

import logging
from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Any, Dict

from backend.app.core.config import settings

logger = logging.getLogger(__name__)


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, error_code: str, status_code: int = 500, details: Dict[str, Any] = None):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class AuthenticationError(AppException):
    """Raised when a protected route is called without a bearer token."""

    def __init__(self, message: str = "Access token required"):
        super().__init__(
            message=message,
            error_code="ERR_AUTH_001",
            status_code=status.HTTP_401_UNAUTHORIZED
        )


class TokenExpiredError(AppException):
    """Raised when a token is past its embedded expiry."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(
            message=message,
            error_code="ERR_AUTH_002",
            status_code=status.HTTP_403_FORBIDDEN
        )


class TokenInvalidError(AppException):
    """Raised when a token signature does not match or its payload is malformed."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(
            message=message,
            error_code="ERR_AUTH_003",
            status_code=status.HTTP_403_FORBIDDEN
        )


class InvalidCredentialsError(AppException):
    """Raised on login failure. Unknown email and wrong password look the same."""

    def __init__(self):
        super().__init__(
            message="Invalid credentials",
            error_code="ERR_AUTH_004",
            status_code=status.HTTP_400_BAD_REQUEST
        )


class DuplicateIdentityError(AppException):
    """Raised when registering an email that already exists."""

    def __init__(self, message: str = "User already exists"):
        super().__init__(
            message=message,
            error_code="ERR_DUPLICATE_001",
            status_code=status.HTTP_400_BAD_REQUEST
        )


class InsufficientPermissionsError(AppException):
    """Raised when user doesn't have permission to perform an action."""

    def __init__(self, message: str = "Access denied", details: Dict[str, Any] = None):
        super().__init__(
            message=message,
            error_code="ERR_PERM_001",
            status_code=status.HTTP_403_FORBIDDEN,
            details=details
        )


class ResourceNotFoundError(AppException):
    """Raised when requested resource is not found."""

    def __init__(self, resource: str, resource_id: Any = None):
        super().__init__(
            message=f"{resource} not found",
            error_code="ERR_NOT_FOUND_001",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource": resource, "id": resource_id}
        )


class DanglingReferenceError(AppException):
    """Raised in strict mode when a trip references records that do not exist."""

    def __init__(self, resource: str, missing_ids: list):
        super().__init__(
            message=f"Referenced {resource} not found",
            error_code="ERR_REFERENCE_001",
            status_code=status.HTTP_400_BAD_REQUEST,
            details={"resource": resource, "missing_ids": missing_ids}
        )


class UniqueCodeExhaustedError(AppException):
    """Raised when a generated tracking or trip code keeps colliding."""

    def __init__(self, code_kind: str):
        super().__init__(
            message=f"Could not generate a unique {code_kind}",
            error_code="ERR_INTERNAL_002",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


def _error_body(message: str, error_code: str, details: Dict[str, Any] = None) -> Dict[str, Any]:
    body = {"error": message, "error_code": error_code}
    if details:
        body["details"] = details
    return body


# Global Exception Handlers

async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handler for custom application exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(_error_body(exc.message, exc.error_code, exc.details))
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handler for Starlette/FastAPI HTTPException with standardized format."""
    error_code_map = {
        400: "ERR_BAD_REQUEST",
        401: "ERR_UNAUTHORIZED",
        403: "ERR_FORBIDDEN",
        404: "ERR_NOT_FOUND",
        405: "ERR_METHOD_NOT_ALLOWED",
        500: "ERR_INTERNAL_SERVER"
    }

    error_code = error_code_map.get(exc.status_code, "ERR_UNKNOWN")
    message = exc.detail
    # Router-level miss (no endpoint matched)
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        message = "Route not found"

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(message, error_code),
        headers=getattr(exc, "headers", None)
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handler for Pydantic validation errors."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder(
            _error_body("Validation error", "ERR_VALIDATION", {"errors": exc.errors()})
        )
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handler for unhandled exceptions. Detail is only exposed in development."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Something went wrong!",
            "error_code": "ERR_INTERNAL_SERVER",
            "message": str(exc) if settings.is_development else "Internal server error"
        }
    )
