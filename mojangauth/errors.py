from typing import Any

from .models import ErrorCode


class AuthException(Exception):
    """Base class for auth-related errors.

    Attributes
    ----------
    code : ErrorCode | str | None
        A short machine-friendly error code (e.g. ErrorCode.ERROR_INVALID_CREDENTIALS).
    detail : str | None
        Optional extra detail (e.g., server response text).
    """

    def __init__(
        self,
        message: str = "",
        *,
        code: ErrorCode | str | None = None,
        detail: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.detail = detail

    def __str__(self) -> str:
        if self.code:
            code = self.code.value if isinstance(self.code, ErrorCode) else self.code
            return f"[{code}] {super().__str__()}"
        return super().__str__()


class AuthenticationFailed(AuthException):
    """Raised by the provider when a login attempt does not produce a session."""


class PromptTimeout(AuthException):
    """Raised when the host never submits the credentials dialog in time."""


class RequestError(AuthException):
    """Raised internally for a non-2xx response from the auth server."""

    def __init__(self, operation: str, status: int, body: Any = None):
        super().__init__(
            f"{operation} failed: HTTP {status}",
            code=f"HTTP-{status}",
            detail=str(body) if body else None,
        )
        self.status = status
        self.body = body if body is not None else {}
