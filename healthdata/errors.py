"""Error types and user-facing messages for upstream API failures."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

import httpx

log = logging.getLogger(__name__)

ERROR_MESSAGES = {
    "network_error": "Network error. Please check your internet connection and try again.",
    "authentication_error": "Authentication error. Please sign in again.",
    "permission_denied": "You don't have permission to perform this action.",
    "data_not_found": "The requested data could not be found.",
    "invalid_input": "Invalid input. Please check your information and try again.",
    "rate_limited": "Too many requests. Please try again later.",
    "server_error": "Something went wrong on our end. Please try again later.",
    "invalid_response": "The service sent a response we could not read. Please try again later.",
    "unexpected_error": "An unexpected error occurred. Please try again.",
}

_STATUS_CODES = {
    401: "authentication_error",
    403: "permission_denied",
    404: "data_not_found",
    429: "rate_limited",
}


class HealthDataError(Exception):
    """Base error carrying a user-facing message and a machine-readable code."""

    def __init__(
        self,
        message: str,
        code: str = "unknown",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "timestamp": self.timestamp.isoformat(),
            "details": self.details,
        }


class APIError(HealthDataError):
    """An upstream HTTP call failed."""

    def __init__(
        self,
        message: str,
        code: str = "unknown",
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)
        self.status_code = status_code


def code_for_status(status_code: int) -> str:
    if status_code in _STATUS_CODES:
        return _STATUS_CODES[status_code]
    if status_code >= 500:
        return "server_error"
    return "unexpected_error"


def handle_error(exc: BaseException, operation: str) -> HealthDataError:
    """Log ``exc`` and turn it into a HealthDataError with a readable message."""
    log.warning("Error during %s: %s", operation, exc)

    if isinstance(exc, HealthDataError):
        return exc
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        code = code_for_status(status)
        return APIError(
            ERROR_MESSAGES[code],
            code=code,
            status_code=status,
            details={"operation": operation, "url": str(exc.request.url)},
        )
    if isinstance(exc, (json.JSONDecodeError, UnicodeDecodeError)):
        return APIError(
            ERROR_MESSAGES["invalid_response"],
            code="invalid_response",
            details={"operation": operation},
        )
    if isinstance(exc, httpx.TransportError):
        return APIError(
            ERROR_MESSAGES["network_error"],
            code="network_error",
            details={"operation": operation},
        )
    message = str(exc) or f"Failed to {operation}"
    return HealthDataError(message, code="unexpected_error", details={"operation": operation})
