"""Error types raised by paykit."""
from __future__ import annotations

from typing import Any, Optional


class PaykitError(Exception):
    """Base exception for paykit."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or "PAYKIT_ERROR"
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
            }
        }


class ConfigurationError(PaykitError):
    """Invalid or missing toolkit configuration."""

    def __init__(self, message: str, errors: Optional[list[dict[str, Any]]] = None):
        super().__init__(
            message,
            code="CONFIGURATION_ERROR",
            details={"errors": errors} if errors else None,
        )
        self.errors = errors or []


class ValidationError(PaykitError):
    """Tool arguments do not match the tool's parameter schema."""

    def __init__(
        self,
        message: str,
        tool: Optional[str] = None,
        errors: Optional[list[dict[str, Any]]] = None,
    ):
        super().__init__(
            message,
            code="VALIDATION_ERROR",
            details={"tool": tool, "errors": errors or []},
        )
        self.tool = tool
        self.errors = errors or []


class UnknownToolError(ValidationError):
    """No tool is registered under the requested name."""

    def __init__(self, tool: str, available: list[str]):
        super().__init__(
            f"Unknown tool '{tool}'. Valid tools: {', '.join(available)}",
            tool=tool,
        )
        self.code = "UNKNOWN_TOOL"


class BackendError(PaykitError):
    """The payments backend reported a failure."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        request_id: Optional[str] = None,
    ):
        super().__init__(message, code or "BACKEND_ERROR", details)
        self.status_code = status_code
        self.request_id = request_id

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["error"]["status_code"] = self.status_code
        data["error"]["request_id"] = self.request_id
        return data

    @classmethod
    def from_response(cls, status_code: int, body: Any) -> "BackendError":
        """Create BackendError from an HTTP error response body."""
        if not isinstance(body, dict):
            return cls(message=str(body), status_code=status_code)
        error_data = body.get("error", body.get("errorMessage", body.get("detail", body)))
        if isinstance(error_data, str):
            return cls(
                message=error_data,
                status_code=status_code,
                code=body.get("errorCode") or body.get("code"),
            )
        if isinstance(error_data, list):
            return cls(
                message="Validation Error",
                status_code=status_code,
                code="VALIDATION_ERROR",
                details={"errors": error_data},
            )
        if not isinstance(error_data, dict):
            return cls(message=str(error_data or body), status_code=status_code)
        return cls(
            message=error_data.get("message", "Unknown error"),
            status_code=status_code,
            code=error_data.get("code") or error_data.get("errorCode"),
            details=error_data.get("details"),
            request_id=error_data.get("request_id") or error_data.get("traceId"),
        )


class AuthenticationError(BackendError):
    """The API secret was rejected."""

    def __init__(self, message: str = "Invalid or missing API secret", status_code: int = 401):
        super().__init__(message, status_code=status_code, code="AUTHENTICATION_ERROR")


class RateLimitError(BackendError):
    """Rate limit exceeded error."""

    def __init__(self, message: str, retry_after: Optional[int] = None):
        super().__init__(message, status_code=429, code="RATE_LIMIT_EXCEEDED")
        self.retry_after = retry_after
