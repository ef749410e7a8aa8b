from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Literal, NotRequired, TypedDict, TypeVar

T = TypeVar("T")


# ---------- WIRE SHAPES ----------


class Agent(TypedDict):
    name: Literal["Minecraft"]
    version: int


class Profile(TypedDict):
    id: str
    name: str


class UserProperty(TypedDict):
    name: str
    value: str


class User(TypedDict):
    id: str
    properties: list[UserProperty]


class Session(TypedDict):
    """Session object returned by /auth/authenticate and /auth/refresh."""

    accessToken: str
    clientToken: str
    selectedProfile: Profile
    user: NotRequired[User]


class ErrorBody(TypedDict, total=False):
    error: str
    errorMessage: str
    cause: str


# ---------- ENVELOPE ----------


class ResponseStatus(str, Enum):
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


class ErrorCode(str, Enum):
    ERROR_METHOD_NOT_ALLOWED = "ERROR_METHOD_NOT_ALLOWED"
    ERROR_NOT_FOUND = "ERROR_NOT_FOUND"
    ERROR_USER_MIGRATED = "ERROR_USER_MIGRATED"
    ERROR_INVALID_CREDENTIALS = "ERROR_INVALID_CREDENTIALS"
    ERROR_RATELIMITED = "ERROR_RATELIMITED"
    ERROR_INVALID_TOKEN = "ERROR_INVALID_TOKEN"
    ERROR_ACCESS_TOKEN_HAS_PROFILE = "ERROR_ACCESS_TOKEN_HAS_PROFILE"
    ERROR_CREDENTIALS_MISSING = "ERROR_CREDENTIALS_MISSING"
    ERROR_INVALID_SALT_VERSION = "ERROR_INVALID_SALT_VERSION"
    ERROR_UNSUPPORTED_MEDIA_TYPE = "ERROR_UNSUPPORTED_MEDIA_TYPE"
    ERROR_GONE = "ERROR_GONE"
    ERROR_UNREACHABLE = "ERROR_UNREACHABLE"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class Response(Generic[T]):
    """Uniform result of every remote call.

    ``data`` is always populated, falling back to a caller supplied default
    when the call failed. ``error_code`` is set if and only if
    ``response_status`` is ``ERROR``; ``error`` keeps the exception that
    caused the failure, if any.
    """

    data: T
    response_status: ResponseStatus
    error_code: ErrorCode | None = None
    is_internal_error: bool | None = None
    error: BaseException | None = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        if (self.response_status is ResponseStatus.ERROR) != (
            self.error_code is not None
        ):
            raise ValueError(
                "error_code must be set exactly when response_status is ERROR"
            )

    @classmethod
    def success(cls, data: T) -> Response[T]:
        return cls(data=data, response_status=ResponseStatus.SUCCESS)

    @property
    def ok(self) -> bool:
        return self.response_status is ResponseStatus.SUCCESS


# ---------- HOST FACING ----------


@dataclass(frozen=True)
class Credentials:
    email: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class AuthSession:
    """Normalized session handed back to the host launcher."""

    uuid: str
    username: str
    access_token: str = field(repr=False)
    expires_at: datetime.datetime
    client_token: str = ""

    @property
    def expired(self) -> bool:
        return datetime.datetime.now(datetime.UTC) >= self.expires_at
