import argparse
import asyncio
import getpass
import logging
import os
import sys
import threading

from .client import MojangRestAPI
from .errors import AuthenticationFailed
from .models import Response
from .prompt import ModalSpec
from .provider import MojangAuthProvider
from .settings import AUTH_DEBUG, AUTH_ENDPOINT
from .status import default_statuses, status_to_hex


def parse_args(argv: list[str] | None = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(prog="mojangauth")
    parser.add_argument(
        "-e",
        "--endpoint",
        default=AUTH_ENDPOINT,
        help=f"Authentication server to talk to (default: {AUTH_ENDPOINT})",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        default=AUTH_DEBUG,
        help="Log requests and state changes (also enabled by AUTH_DEBUG=1)",
    )
    parser.add_argument(
        "-t",
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait for credentials before giving up (default: forever)",
    )

    sub = parser.add_subparsers(dest="command")
    sub.add_parser("login", help="Log in with email and password (default)")
    for name, text in (
        ("validate", "Check whether an access token is still valid"),
        ("refresh", "Exchange an access token for a new one"),
        ("invalidate", "Invalidate an access token"),
    ):
        p = sub.add_parser(name, help=text)
        p.add_argument("-a", "--access-token", required=True)
        p.add_argument("-c", "--client-token", required=True)
    sub.add_parser("status", help="Show the known services")

    args = parser.parse_args(argv)
    if args.command is None:
        args.command = "login"
    return args


def _abbreviate(token: str) -> str:
    return f"{token[:12]}..." if len(token) > 12 else token


def _read_line(prompt: str, secret: bool = False) -> asyncio.Future[str]:
    """Read one line on a daemon thread so an abandoned prompt can't hold up exit."""
    loop = asyncio.get_running_loop()
    answer: asyncio.Future[str] = loop.create_future()

    def resolve(value: str | None, error: Exception | None):
        if answer.done():
            return
        if error is not None:
            answer.set_exception(error)
        else:
            answer.set_result(value or "")

    def deliver(value: str | None, error: Exception | None):
        try:
            loop.call_soon_threadsafe(resolve, value, error)
        except RuntimeError:
            pass  # loop already closed, nobody is waiting

    def read():
        try:
            value = getpass.getpass(prompt) if secret else input(prompt)
        except Exception as e:
            deliver(None, e)
        else:
            deliver(value, None)

    threading.Thread(target=read, daemon=True).start()
    return answer


class TerminalContext:
    """Asks for credentials on the terminal instead of in a dialog.

    MOJANG_EMAIL / MOJANG_PASSWORD skip the corresponding question.
    """

    async def show_modal(self, spec: ModalSpec):
        print(spec.title)
        data = {}
        for field in spec.fields:
            env = os.getenv(f"MOJANG_{field.name.upper()}")
            if env:
                data[field.name] = env
            else:
                data[field.name] = await _read_line(
                    f"{field.label}: ", secret=field.type == "password"
                )
        spec.on_submit(data)

    def close_modal(self):
        pass


def _print_response(name: str, response: Response) -> bool:
    if response.ok:
        print(f"{name}: {response.data!r}")
        return True

    kind = "internal" if response.is_internal_error else "user"
    print(f"{name} failed: {response.error_code.value} ({kind} error)")
    return False


async def _main(args) -> int:
    if args.command == "status":
        for entry in default_statuses():
            essential = "essential" if entry.essential else ""
            print(
                f"{status_to_hex(entry.status)}  {entry.name:<42} {essential}".rstrip()
            )
        return 0

    async with MojangRestAPI(base_url=args.endpoint) as api:
        if args.command == "login":
            try:
                session = await MojangAuthProvider(api).authenticate(
                    TerminalContext(), timeout=args.timeout
                )
            except AuthenticationFailed as e:
                print(f"Login failed: {e.message}")
                return 1
            print(f"Logged in as {session.username} ({session.uuid})")
            print(f"  access token: {_abbreviate(session.access_token)}")
            print(f"  client token: {session.client_token}")
            print(f"  expires at:   {session.expires_at.isoformat()}")
            return 0

        if args.command == "validate":
            response = await api.validate(args.access_token, args.client_token)
            ok = _print_response("valid", response)
        elif args.command == "refresh":
            response = await api.refresh(args.access_token, args.client_token)
            ok = response.ok
            if ok and response.data:
                print(f"access token: {_abbreviate(response.data['accessToken'])}")
            else:
                _print_response("refresh", response)
        else:
            response = await api.invalidate(args.access_token, args.client_token)
            ok = _print_response("invalidate", response)

    return 0 if ok else 1


def main(argv: list[str] | None = None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        sys.exit(asyncio.run(_main(args)))
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
