"""Routes, the shared user, the login page and the terminal client."""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import logging
import sys
import threading
from dataclasses import dataclass
from enum import Enum
from html import escape

from wschat.chat import Chat
from wschat.event_bus import EventBus
from wschat.websocket import DEFAULT_URL, WebsocketService

logger = logging.getLogger(__name__)


class Route(Enum):
    """Pages of the application, keyed by path."""

    LOGIN = "/"
    CHAT = "/chat"
    NOT_FOUND = "/404"

    @classmethod
    def from_path(cls, path: str) -> Route:
        for route in cls:
            if route.value == path:
                return route
        return cls.NOT_FOUND


@dataclass
class User:
    """The user shared between the login and chat pages."""

    username: str = "initial"


def render_login(user: User, username: str | None = None) -> str:
    """Render the login form; a typed ``username`` is stored on ``user``."""
    if username is not None:
        user.username = username
    typed = username or ""
    disabled = "" if typed else "disabled "
    return (
        '<div class="bg-gray-800 flex w-screen">'
        '<div class="container mx-auto flex flex-col justify-center items-center">'
        '<form class="m-4 flex">'
        '<input class="rounded-l-lg p-4 border-t mr-0 border-b border-l text-gray-800 '
        f'border-gray-200 bg-white" placeholder="Username" value="{escape(typed)}"/>'
        f'<a href="{Route.CHAT.value}">'
        f'<button {disabled}class="px-8 rounded-r-lg bg-violet-600 text-white font-bold p-4 '
        'uppercase border-violet-600 border-t border-b border-r">Go Chatting!</button>'
        "</a></form></div></div>"
    )


def switch(route: Route, user: User, chat: Chat) -> str:
    """Render the page for ``route``."""
    if route is Route.LOGIN:
        return render_login(user)
    if route is Route.CHAT:
        return chat.render()
    return "<h1>404 baby</h1>"


def _render_page(path: str) -> str:
    user = User()
    chat = Chat(user, lambda text: None)
    body = switch(Route.from_path(path), user, chat)
    return f'<div class="flex w-screen h-screen">{body}</div>'


async def _run_client(url: str, username: str) -> None:
    bus = EventBus()
    service = WebsocketService(bus, url)
    user = User(username)
    chat = Chat(user, service.send)

    def on_message(text: str) -> None:
        seen = len(chat.messages)
        try:
            changed = chat.handle_message(text)
        except ValueError as exc:
            logger.error("bad message from server: %s", exc)
            return
        if not changed:
            return
        if len(chat.messages) > seen:
            latest = chat.messages[-1]
            print(f"{latest.sender}: {latest.message}", flush=True)
        else:
            print("Users: " + ", ".join(u.name for u in chat.users), flush=True)

    bus.connect(on_message)

    loop = asyncio.get_running_loop()
    lines: asyncio.Queue[str | None] = asyncio.Queue()

    def feed(item: str | None) -> None:
        with contextlib.suppress(RuntimeError):
            loop.call_soon_threadsafe(lines.put_nowait, item)

    def pump() -> None:
        for line in sys.stdin:
            feed(line.rstrip("\n"))
        feed(None)

    threading.Thread(target=pump, daemon=True).start()

    async def typing() -> None:
        while (line := await lines.get()) is not None:
            if line:
                chat.submit_message(line)
        await service.close()

    typist = asyncio.create_task(typing())
    try:
        await service.run()
    finally:
        typist.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await typist


def main(argv: list[str] | None = None) -> int:
    """Run the terminal chat client, or print a rendered page."""
    parser = argparse.ArgumentParser(prog="wschat", description="Websocket chat client.")
    parser.add_argument("--url", default=DEFAULT_URL, help="chat server address")
    parser.add_argument("--username", default="", help="name to chat under")
    parser.add_argument("--render", metavar="PATH", help="print the page for PATH and exit")
    parser.add_argument("--debug", action="store_true", help="log debug output")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)

    if args.render is not None:
        print(_render_page(args.render))
        return 0
    if not args.username:
        parser.error("a non-empty --username is required")
    try:
        asyncio.run(_run_client(args.url, args.username))
    except OSError as exc:
        print(f"wschat: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130
    return 0