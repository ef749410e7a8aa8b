import datetime
import logging
from enum import Enum

from .client import MojangRestAPI, is_network_error
from .clienttoken import generate_client_token
from .errors import AuthenticationFailed, PromptTimeout
from .models import AuthSession, ErrorCode, Response, Session
from .prompt import AuthContext, prompt_credentials
from .settings import SESSION_EXPIRY_HOURS

log = logging.getLogger(__name__)

DEFAULT_MESSAGE = "Failed to authenticate with Mojang"
NETWORK_ERROR_MESSAGE = "Network error"
INVALID_RESPONSE_MESSAGE = "Invalid response from authentication server"

_ERROR_MESSAGES = {
    ErrorCode.ERROR_UNREACHABLE: DEFAULT_MESSAGE,
    ErrorCode.ERROR_INVALID_CREDENTIALS: "Invalid credentials",
    ErrorCode.ERROR_RATELIMITED: "Too many requests, please try again later",
    ErrorCode.ERROR_INVALID_TOKEN: "Invalid token",
}


class AuthState(Enum):
    AWAITING_CREDENTIALS = "awaiting_credentials"
    AUTHENTICATING = "authenticating"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


def error_message(code: ErrorCode | None, network_error: bool = False) -> str:
    """Human readable message for a failed login."""
    if network_error:
        return NETWORK_ERROR_MESSAGE
    if code is None:
        return DEFAULT_MESSAGE
    return _ERROR_MESSAGES.get(code, DEFAULT_MESSAGE)


def _session_from(response: Response[Session | None], client_token: str) -> AuthSession:
    if not response.ok or response.data is None:
        raise AuthenticationFailed(
            error_message(response.error_code, is_network_error(response.error)),
            code=response.error_code,
        )

    data = response.data
    profile = data.get("selectedProfile") if isinstance(data, dict) else None
    access_token = data.get("accessToken") if isinstance(data, dict) else None
    if not profile or not access_token or not profile.get("id"):
        raise AuthenticationFailed(INVALID_RESPONSE_MESSAGE)

    return AuthSession(
        uuid=profile["id"],
        username=profile.get("name", ""),
        access_token=access_token,
        expires_at=datetime.datetime.now(datetime.UTC)
        + datetime.timedelta(hours=SESSION_EXPIRY_HOURS),
        client_token=data.get("clientToken") or client_token,
    )


class MojangAuthProvider:
    """Authentication provider for legacy Mojang (Yggdrasil) accounts."""

    id = "mojang"
    name = "Mojang Login"
    description = "Login with Mojang account using email and password"
    logo = "https://launchercontent.mojang.com/img/mojang-logo.png"

    def __init__(
        self, api: MojangRestAPI | None = None, prompt_timeout: float | None = None
    ):
        self.api = api or MojangRestAPI()
        self.prompt_timeout = prompt_timeout

    async def authenticate(
        self, ctx: AuthContext, timeout: float | None = None
    ) -> AuthSession:
        """
        Ask the user for their credentials and log them in.

        Args:
            ctx: host context used to show the credentials dialog
            timeout: seconds to wait for the dialog, overriding prompt_timeout;
                None waits forever

        Returns:
            the normalized session

        Raises:
            AuthenticationFailed: with a message fit to show the user and,
                when the server told us why, the ErrorCode
        """
        if timeout is None:
            timeout = self.prompt_timeout

        state = AuthState.AWAITING_CREDENTIALS
        try:
            credentials = await prompt_credentials(ctx, timeout)

            state = AuthState.AUTHENTICATING
            log.debug("%s: %s as %s", self.id, state.value, credentials.email)

            client_token = generate_client_token()
            response = await self.api.authenticate(
                credentials.email, credentials.password, client_token, True
            )
            session = _session_from(response, client_token)
        except AuthenticationFailed as e:
            state = AuthState.FAILED
            log.debug("%s: %s (%s)", self.id, state.value, e)
            raise
        except PromptTimeout as e:
            state = AuthState.FAILED
            log.debug("%s: %s (%s)", self.id, state.value, e)
            raise AuthenticationFailed(e.message) from e
        except Exception as e:
            log.exception("%s: unexpected error while %s", self.id, state.value)
            raise AuthenticationFailed(DEFAULT_MESSAGE) from e

        state = AuthState.SUCCEEDED
        log.debug("%s: %s for %s", self.id, state.value, session.username)
        return session


provider = MojangAuthProvider()
