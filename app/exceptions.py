# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized error types for the API and the business services.
# Every error carries a machine-readable code and, where possible, a
# suggestion telling the caller how to fix the request.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class RitmoHubException(Exception):
    """
    Base exception for the RitmoHub API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "RITMOHUB_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Domain Exceptions
# =============================================================================

class ValidationError(RitmoHubException):
    """Raised when financial or creation inputs are missing or out of range."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        suggestion: str | None = None,
    ):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=422,
            suggestion=suggestion,
            details={"field": field} if field else None,
        )


class InvalidTransitionError(RitmoHubException):
    """Raised when a status change does not follow the workflow order."""

    def __init__(
        self,
        current_status: str,
        requested_status: str,
        expected_status: str | None = None,
        entity: str = "video",
    ):
        if expected_status is None:
            message = f"Cannot move {entity} from terminal status '{current_status}'"
            suggestion = f"This {entity} has no further steps"
        else:
            message = (
                f"Cannot move {entity} from '{current_status}' to '{requested_status}'"
            )
            suggestion = f"The only valid next status is '{expected_status}'"
        super().__init__(
            message=message,
            code="INVALID_TRANSITION",
            status_code=409,
            suggestion=suggestion,
            details={
                "entity": entity,
                "current_status": current_status,
                "requested_status": requested_status,
                "expected_status": expected_status,
            },
        )


class PermissionDeniedError(RitmoHubException):
    """Raised when the requester's role may not perform an action."""

    def __init__(self, role: str, action: str):
        super().__init__(
            message=f"Role '{role}' is not allowed to {action}",
            code="PERMISSION_DENIED",
            status_code=403,
            suggestion="Ask an administrator to perform this action",
            details={"role": role, "action": action},
        )


class NotFoundError(RitmoHubException):
    """Raised when a client, package or video ID doesn't exist."""

    def __init__(self, entity: str, entity_id: str):
        super().__init__(
            message=f"{entity.capitalize()} not found: {entity_id}",
            code="NOT_FOUND",
            status_code=404,
            suggestion=f"Check that the {entity} ID is correct",
            details={"entity": entity, "id": entity_id},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def ritmohub_exception_handler(
    request: Request,
    exc: RitmoHubException
) -> JSONResponse:
    """
    Convert RitmoHubException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle Pydantic request validation errors.

    Converts validation errors to user-friendly messages.
    """
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": str(exc)
        }
    )
