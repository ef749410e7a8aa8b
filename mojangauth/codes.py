from typing import Any, Mapping

from .models import ErrorCode

INTERNAL_ERRORS = frozenset(
    {
        ErrorCode.ERROR_METHOD_NOT_ALLOWED,
        ErrorCode.ERROR_NOT_FOUND,
        ErrorCode.ERROR_UNSUPPORTED_MEDIA_TYPE,
        ErrorCode.ERROR_UNREACHABLE,
        ErrorCode.UNKNOWN,
    }
)

_SIMPLE_ERRORS = {
    "method not allowed": ErrorCode.ERROR_METHOD_NOT_ALLOWED,
    "not found": ErrorCode.ERROR_NOT_FOUND,
    "unsupported media type": ErrorCode.ERROR_UNSUPPORTED_MEDIA_TYPE,
    "gone": ErrorCode.ERROR_GONE,
}


def classify(body: Mapping[str, Any] | None) -> ErrorCode:
    """
    Work out which ErrorCode an error body from the auth server describes.

    Never raises; bodies that are missing, malformed or simply not known
    come back as ErrorCode.UNKNOWN.
    """
    if not isinstance(body, Mapping):
        return ErrorCode.UNKNOWN

    error = body.get("error")
    if not error or not isinstance(error, str):
        return ErrorCode.UNKNOWN

    error = error.lower()
    if error == "forbiddenoperationexception":
        message = body.get("errorMessage")
        if not isinstance(message, str):
            message = ""
        if "Invalid credentials" in message:
            return ErrorCode.ERROR_INVALID_CREDENTIALS
        if "Invalid token" in message:
            return ErrorCode.ERROR_INVALID_TOKEN
        return ErrorCode.ERROR_INVALID_CREDENTIALS

    return _SIMPLE_ERRORS.get(error, ErrorCode.UNKNOWN)


decipher_error_code = classify


def is_internal_error(code: ErrorCode) -> bool:
    """True if the failure is on our (or the server's) side rather than the user's."""
    return code in INTERNAL_ERRORS
