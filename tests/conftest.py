"""
Shared fixtures: a throwaway local auth server and host contexts.
"""
import asyncio
import socket
import threading
from typing import Any
from unittest.mock import Mock

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from mojangauth.client import MojangRestAPI


class FakeAuthServer:
    """Answers POSTs with whatever was registered for the path with reply()."""

    def __init__(self):
        self.url = ""
        self.replies: dict[str, tuple[int, Any, float]] = {}
        self.requests: list[tuple[str, Any]] = []

    def reply(self, path: str, status: int, body: Any = None, delay: float = 0.0):
        self.replies[path] = (status, body, delay)

    def payloads(self, path: str) -> list[Any]:
        return [payload for p, payload in self.requests if p == path]

    async def handle(self, request: web.Request) -> web.Response:
        try:
            payload = await request.json()
        except ValueError:
            payload = None
        self.requests.append((request.path, payload))

        status, body, delay = self.replies.get(
            request.path, (404, {"error": "Not Found", "errorMessage": "Not Found"}, 0)
        )
        if delay:
            await asyncio.sleep(delay)
        if body is None:
            return web.Response(status=status)
        if isinstance(body, str):
            return web.Response(status=status, text=body)
        return web.json_response(body, status=status)


async def _serve(fake: FakeAuthServer) -> TestServer:
    app = web.Application()
    app.router.add_post("/{tail:.*}", fake.handle)

    server = TestServer(app)
    await server.start_server()
    fake.url = str(server.make_url("")).rstrip("/")
    return server


@pytest_asyncio.fixture
async def auth_server():
    fake = FakeAuthServer()
    server = await _serve(fake)
    yield fake
    await server.close()


@pytest.fixture
def auth_server_thread():
    """Same as auth_server, but on its own loop for code that calls asyncio.run."""
    fake = FakeAuthServer()
    loop = asyncio.new_event_loop()
    thread = threading.Thread(target=loop.run_forever, daemon=True)
    thread.start()

    server = asyncio.run_coroutine_threadsafe(_serve(fake), loop).result(5)
    yield fake

    asyncio.run_coroutine_threadsafe(server.close(), loop).result(5)
    loop.call_soon_threadsafe(loop.stop)
    thread.join(5)
    loop.close()


@pytest.fixture
def api(auth_server):
    return MojangRestAPI(base_url=auth_server.url)


@pytest.fixture
def dead_url():
    """URL of a local port nothing listens on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        port = s.getsockname()[1]
    return f"http://127.0.0.1:{port}"


def make_context(email: str = "test@example.com", password: str = "password123"):
    """Host context whose dialog is submitted as soon as it is shown."""
    ctx = Mock()
    ctx.show_modal = Mock(
        side_effect=lambda spec: spec.on_submit({"email": email, "password": password})
    )
    ctx.close_modal = Mock()
    return ctx


@pytest.fixture
def auth_context():
    return make_context()


@pytest.fixture
def context_factory():
    return make_context
