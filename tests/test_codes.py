import pytest

from mojangauth.codes import INTERNAL_ERRORS, classify, is_internal_error
from mojangauth.models import ErrorCode


@pytest.mark.parametrize(
    "body, expected",
    [
        ({"error": "Method Not Allowed"}, ErrorCode.ERROR_METHOD_NOT_ALLOWED),
        ({"error": "Not Found"}, ErrorCode.ERROR_NOT_FOUND),
        ({"error": "Unsupported Media Type"}, ErrorCode.ERROR_UNSUPPORTED_MEDIA_TYPE),
        ({"error": "Gone"}, ErrorCode.ERROR_GONE),
        ({"error": "GONE"}, ErrorCode.ERROR_GONE),
        ({"error": "Invalid credentials"}, ErrorCode.UNKNOWN),
        ({"error": "IllegalArgumentException"}, ErrorCode.UNKNOWN),
    ],
)
def test_classify(body, expected):
    assert classify(body) is expected


@pytest.mark.parametrize(
    "message, expected",
    [
        ("Invalid credentials. Invalid username or password.", ErrorCode.ERROR_INVALID_CREDENTIALS),
        ("Invalid token.", ErrorCode.ERROR_INVALID_TOKEN),
        ("Account protected with two factor auth.", ErrorCode.ERROR_INVALID_CREDENTIALS),
        (None, ErrorCode.ERROR_INVALID_CREDENTIALS),
    ],
)
def test_classify_forbidden_operation(message, expected):
    body = {"error": "ForbiddenOperationException"}
    if message is not None:
        body["errorMessage"] = message
    assert classify(body) is expected


@pytest.mark.parametrize(
    "body", [None, {}, {"error": ""}, {"error": None}, {"error": 403}, "gone", []]
)
def test_classify_without_error_is_unknown(body):
    assert classify(body) is ErrorCode.UNKNOWN


def test_classify_ignores_cause():
    body = {"error": "ForbiddenOperationException", "cause": "Invalid token"}
    assert classify(body) is ErrorCode.ERROR_INVALID_CREDENTIALS


@pytest.mark.parametrize("code", list(ErrorCode))
def test_is_internal_error(code):
    expected = code in {
        ErrorCode.ERROR_METHOD_NOT_ALLOWED,
        ErrorCode.ERROR_NOT_FOUND,
        ErrorCode.ERROR_UNSUPPORTED_MEDIA_TYPE,
        ErrorCode.ERROR_UNREACHABLE,
        ErrorCode.UNKNOWN,
    }
    assert is_internal_error(code) is expected
    assert is_internal_error(code) is is_internal_error(code)


def test_user_actionable_codes():
    assert not INTERNAL_ERRORS & {
        ErrorCode.ERROR_INVALID_CREDENTIALS,
        ErrorCode.ERROR_INVALID_TOKEN,
        ErrorCode.ERROR_RATELIMITED,
    }


def test_package_exports():
    import mojangauth

    assert mojangauth.INTERNAL_ERRORS is INTERNAL_ERRORS
    assert "INTERNAL_ERRORS" in mojangauth.__all__
