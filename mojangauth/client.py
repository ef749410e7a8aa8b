import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, TypeVar

import aiohttp

from .codes import classify, is_internal_error
from .errors import RequestError
from .models import Agent, ErrorCode, Response, ResponseStatus, Session
from .settings import AUTH_ENDPOINT, MINECRAFT_AGENT, REQUEST_TIMEOUT

log = logging.getLogger(__name__)

T = TypeVar("T")


def is_network_error(error: BaseException | None) -> bool:
    """Connection refused, DNS failure, dropped connection and the like."""
    return isinstance(error, aiohttp.ClientConnectionError) and not isinstance(
        error, asyncio.TimeoutError
    )


def handle_request_error(
    operation: str, error: BaseException, fallback: Callable[[], T]
) -> Response[T]:
    """Turn an exception raised while talking to the auth server into an envelope."""
    if isinstance(error, (aiohttp.ClientConnectionError, asyncio.TimeoutError)):
        code = ErrorCode.ERROR_UNREACHABLE
    elif isinstance(error, RequestError):
        code = classify(error.body)
        if code is ErrorCode.UNKNOWN and error.status == 429:
            code = ErrorCode.ERROR_RATELIMITED
    else:
        code = ErrorCode.UNKNOWN

    log.warning("%s failed (%s): %r", operation, code.value, error)

    return Response(
        data=fallback(),
        response_status=ResponseStatus.ERROR,
        error_code=code,
        is_internal_error=is_internal_error(code),
        error=error,
    )


def _expect_specific_success(operation: str, expected: int, actual: int) -> None:
    if actual != expected:
        log.warning("%s expected %d response, received %d.", operation, expected, actual)


class MojangRestAPI:
    """
    Client for a legacy Mojang (Yggdrasil) compatible authentication server.

    Every operation returns a Response envelope instead of raising; failures
    are described by its error_code. Can be used as an async context manager
    to share one aiohttp session between calls, otherwise each call opens
    its own.
    """

    AUTH_ENDPOINT = AUTH_ENDPOINT
    MINECRAFT_AGENT = MINECRAFT_AGENT

    def __init__(
        self,
        base_url: str = AUTH_ENDPOINT,
        timeout: float = REQUEST_TIMEOUT,
        session: aiohttp.ClientSession | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client_session = session
        self._owns_session = False

    async def __aenter__(self):
        if self._client_session is None:
            self._client_session = aiohttp.ClientSession()
            self._owns_session = True
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if self._owns_session and self._client_session is not None:
            await self._client_session.close()
            self._client_session = None
            self._owns_session = False

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[aiohttp.ClientSession]:
        if self._client_session is not None:
            yield self._client_session
        else:
            async with aiohttp.ClientSession() as session:
                yield session

    async def _post(
        self,
        operation: str,
        path: str,
        payload: dict[str, Any],
        read_body: bool = True,
    ) -> tuple[int, Any]:
        async with self._session() as session:
            async with session.post(
                f"{self.base_url}{path}",
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as r:
                if not r.ok:
                    try:
                        body = await r.json(content_type=None)
                    except ValueError:
                        body = {}
                    raise RequestError(operation, r.status, body)

                if not read_body or r.status == 204:
                    return r.status, None
                return r.status, await r.json(content_type=None)

    async def authenticate(
        self,
        username: str,
        password: str,
        client_token: str | None = None,
        request_user: bool = True,
        agent: Agent = MINECRAFT_AGENT,
    ) -> Response[Session | None]:
        """
        Authenticate a user with their Mojang credentials.

        Args:
            username: account email or legacy username
            password: account password
            client_token: correlation token to bind the session to; the
                server picks one if omitted
            request_user: ask the server to include the user object
            agent: game agent, Minecraft by default

        Returns:
            Response whose data is the session, or None on failure
        """
        payload: dict[str, Any] = {
            "agent": agent,
            "username": username,
            "password": password,
            "requestUser": request_user,
        }
        if client_token is not None:
            payload["clientToken"] = client_token

        try:
            status, data = await self._post(
                "Mojang Authenticate", "/auth/authenticate", payload
            )
        except Exception as e:
            return handle_request_error("Mojang Authenticate", e, lambda: None)

        _expect_specific_success("Mojang Authenticate", 200, status)
        return Response.success(data)

    async def validate(self, access_token: str, client_token: str) -> Response[bool]:
        """
        Validate an access token.

        A 403 means the token is no longer valid, which is a successful
        answer (data=False) rather than an error.
        """
        payload = {"accessToken": access_token, "clientToken": client_token}

        try:
            status, _ = await self._post(
                "Mojang Validate", "/auth/validate", payload, read_body=False
            )
        except RequestError as e:
            if e.status == 403:
                return Response.success(False)
            return handle_request_error("Mojang Validate", e, lambda: False)
        except Exception as e:
            return handle_request_error("Mojang Validate", e, lambda: False)

        _expect_specific_success("Mojang Validate", 204, status)
        # ely.by answers 200 instead of 204
        return Response.success(status in (204, 200))

    async def invalidate(self, access_token: str, client_token: str) -> Response[None]:
        """Invalidate an access token."""
        payload = {"accessToken": access_token, "clientToken": client_token}

        try:
            status, _ = await self._post(
                "Mojang Invalidate", "/auth/invalidate", payload, read_body=False
            )
        except Exception as e:
            return handle_request_error("Mojang Invalidate", e, lambda: None)

        _expect_specific_success("Mojang Invalidate", 204, status)
        return Response.success(None)

    async def refresh(
        self, access_token: str, client_token: str, request_user: bool = True
    ) -> Response[Session | None]:
        """Exchange an access/client token pair for a renewed session."""
        payload = {
            "accessToken": access_token,
            "clientToken": client_token,
            "requestUser": request_user,
        }

        try:
            status, data = await self._post("Mojang Refresh", "/auth/refresh", payload)
        except Exception as e:
            return handle_request_error("Mojang Refresh", e, lambda: None)

        _expect_specific_success("Mojang Refresh", 200, status)
        return Response.success(data)
