import asyncio
import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Protocol

from .errors import PromptTimeout
from .models import Credentials

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModalField:
    label: str
    type: str
    name: str


@dataclass(frozen=True)
class ModalSpec:
    title: str
    fields: list[ModalField]
    on_submit: Callable[[Mapping[str, Any]], None] = field(repr=False)


class AuthContext(Protocol):
    """What the host launcher gives a provider to talk to the user.

    Both methods may be plain or async functions.
    """

    def show_modal(self, spec: ModalSpec) -> Any: ...
    def close_modal(self) -> Any: ...


LOGIN_FIELDS = [
    ModalField(label="Email", type="email", name="email"),
    ModalField(label="Password", type="password", name="password"),
]


async def _maybe_await(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result


async def prompt_credentials(
    ctx: AuthContext, timeout: float | None = None
) -> Credentials:
    """
    Ask the host to show the login dialog and wait for it to be submitted.

    Only the first submission counts. The dialog is closed once this returns
    or fails, including on timeout (PromptTimeout) and cancellation.
    """
    loop = asyncio.get_running_loop()
    submitted: asyncio.Future[Credentials] = loop.create_future()

    def on_submit(data: Mapping[str, Any]) -> None:
        if submitted.done():
            return
        submitted.set_result(
            Credentials(
                email=str(data.get("email") or ""),
                password=str(data.get("password") or ""),
            )
        )

    spec = ModalSpec(title="Mojang Login", fields=LOGIN_FIELDS, on_submit=on_submit)
    try:
        async with asyncio.timeout(timeout):
            # async hosts may only return once the user is done
            await _maybe_await(ctx.show_modal(spec))
            return await submitted
    except TimeoutError:
        log.debug("credentials dialog timed out after %ss", timeout)
        raise PromptTimeout(
            "Timed out waiting for credentials", code="PROMPT-TIMEOUT"
        ) from None
    finally:
        await _maybe_await(ctx.close_modal())
