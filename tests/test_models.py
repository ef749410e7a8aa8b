import datetime

import pytest

from mojangauth.models import AuthSession, Credentials, ErrorCode, Response, ResponseStatus


def test_success_envelope():
    response = Response.success(True)
    assert response.ok
    assert response.response_status is ResponseStatus.SUCCESS
    assert response.error_code is None
    assert response.is_internal_error is None


def test_error_envelope_needs_code():
    with pytest.raises(ValueError):
        Response(data=None, response_status=ResponseStatus.ERROR)


def test_success_envelope_rejects_code():
    with pytest.raises(ValueError):
        Response(
            data=None,
            response_status=ResponseStatus.SUCCESS,
            error_code=ErrorCode.UNKNOWN,
        )


def test_secrets_not_in_repr():
    assert "hunter2" not in repr(Credentials("a@b.c", "hunter2"))
    session = AuthSession(
        uuid="id",
        username="name",
        access_token="secret-token",
        expires_at=datetime.datetime.now(datetime.UTC),
    )
    assert "secret-token" not in repr(session)


def test_session_expired():
    now = datetime.datetime.now(datetime.UTC)
    past = AuthSession("id", "name", "tok", now - datetime.timedelta(seconds=1))
    future = AuthSession("id", "name", "tok", now + datetime.timedelta(hours=1))
    assert past.expired
    assert not future.expired
