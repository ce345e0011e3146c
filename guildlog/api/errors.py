"""
GuildLog - API Error System
===========================

Error codes and exceptions giving every dashboard error the same JSON
body: {success, error_code, message, details}.
"""

from enum import Enum
from typing import Any, Dict, Optional

from fastapi import HTTPException
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_422_UNPROCESSABLE_ENTITY,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_503_SERVICE_UNAVAILABLE,
)


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCode(str, Enum):
    """
    Error codes for the dashboard API.

    Format: CATEGORY_SPECIFIC_ERROR
    """

    # Authentication errors (401)
    AUTH_MISSING_TOKEN = "AUTH_MISSING_TOKEN"
    AUTH_INVALID_TOKEN = "AUTH_INVALID_TOKEN"
    AUTH_OAUTH_NOT_CONFIGURED = "AUTH_OAUTH_NOT_CONFIGURED"

    # Permission errors (403)
    PERMISSION_DENIED = "PERMISSION_DENIED"

    # Bot errors (503)
    BOT_NOT_INITIALIZED = "BOT_NOT_INITIALIZED"

    # Validation errors (422)
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Server errors (500)
    SERVER_ERROR = "SERVER_ERROR"
    SERVER_DATABASE_ERROR = "SERVER_DATABASE_ERROR"


# =============================================================================
# Error Messages
# =============================================================================

ERROR_MESSAGES: Dict[ErrorCode, str] = {
    ErrorCode.AUTH_MISSING_TOKEN: "Not authenticated",
    ErrorCode.AUTH_INVALID_TOKEN: "Invalid or malformed session token",
    ErrorCode.AUTH_OAUTH_NOT_CONFIGURED: "Discord OAuth is not configured",
    ErrorCode.PERMISSION_DENIED: "You do not have permission to manage this server",
    ErrorCode.BOT_NOT_INITIALIZED: "Bot not initialized",
    ErrorCode.VALIDATION_ERROR: "Invalid request body",
    ErrorCode.SERVER_ERROR: "Internal server error",
    ErrorCode.SERVER_DATABASE_ERROR: "Database error",
}


ERROR_STATUS_CODES: Dict[ErrorCode, int] = {
    ErrorCode.AUTH_MISSING_TOKEN: HTTP_401_UNAUTHORIZED,
    ErrorCode.AUTH_INVALID_TOKEN: HTTP_401_UNAUTHORIZED,
    ErrorCode.AUTH_OAUTH_NOT_CONFIGURED: HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.PERMISSION_DENIED: HTTP_403_FORBIDDEN,
    ErrorCode.BOT_NOT_INITIALIZED: HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.VALIDATION_ERROR: HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.SERVER_ERROR: HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.SERVER_DATABASE_ERROR: HTTP_500_INTERNAL_SERVER_ERROR,
}


# =============================================================================
# Exception
# =============================================================================

class APIError(HTTPException):
    """
    HTTPException carrying an ErrorCode.

    Usage:
        raise APIError(ErrorCode.PERMISSION_DENIED)
    """

    def __init__(
        self,
        code: ErrorCode,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        self.error_code = code
        self.error_message = message or ERROR_MESSAGES.get(code, "An error occurred")

        if headers is None and ERROR_STATUS_CODES.get(code) == HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}

        super().__init__(
            status_code=status_code or ERROR_STATUS_CODES.get(code, HTTP_400_BAD_REQUEST),
            detail={
                "success": False,
                "error_code": code.value,
                "message": self.error_message,
                "details": details,
            },
            headers=headers,
        )


# =============================================================================
# Helper Functions
# =============================================================================

def error_response(
    code: ErrorCode,
    status_code: Optional[int] = None,
    message: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    """Create a JSON error response without raising an exception."""
    if status_code is None:
        status_code = ERROR_STATUS_CODES.get(code, HTTP_400_BAD_REQUEST)

    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error_code": code.value,
            "message": message or ERROR_MESSAGES.get(code, "An error occurred"),
            "details": details,
        },
    )


__all__ = [
    "ErrorCode",
    "ERROR_MESSAGES",
    "ERROR_STATUS_CODES",
    "APIError",
    "error_response",
]
