"""The chat view: user list, message history and message submission."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from html import escape
from typing import Callable, Protocol

from wschat.event_bus import EventBus
from wschat.protocol import MessageData, MsgType, WebSocketMessage

logger = logging.getLogger(__name__)

AVATAR_TEMPLATE = "https://avatars.example.com/9.x/initials/svg?seed={}"

_BUBBLE_CLASS = "flex items-end w-3/6 bg-gray-100 m-8 rounded-tl-lg rounded-tr-lg rounded-br-lg"
_SEND_ICON = (
    '<svg viewBox="0 0 24 24" xmlns="http://www.w3.org/2000/svg" class="fill-white">'
    '<path d="M0 0h24v24H0z" fill="none"></path>'
    '<path d="M2.01 21L23 12 2.01 3 2 10l15 2-15 2z"></path></svg>'
)


class _HasUsername(Protocol):
    username: str


@dataclass(frozen=True)
class UserProfile:
    """A connected user and the avatar shown for them."""

    name: str
    avatar: str

    @classmethod
    def from_name(cls, name: str) -> UserProfile:
        return cls(name, AVATAR_TEMPLATE.format(name))


@dataclass
class Chat:
    """State of the chat screen for one user."""

    user: _HasUsername
    send: Callable[[str], object]
    bus: EventBus | None = None
    users: list[UserProfile] = field(default_factory=list)
    messages: list[MessageData] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.register_message()
        if self.bus is not None:
            self.bus.connect(self.handle_message)

    def register_message(self) -> None:
        """Announce the current user to the server."""
        message = WebSocketMessage(MsgType.REGISTER, data=self.user.username)
        try:
            self.send(message.to_json())
        except (asyncio.QueueFull, ConnectionError):
            return
        logger.debug("message sent successfully")

    def handle_message(self, text: str) -> bool:
        """Apply a server message; return True when the view changed."""
        message = WebSocketMessage.from_json(text)
        if message.message_type is MsgType.USERS:
            self.users = [UserProfile.from_name(name) for name in message.data_array or ()]
            return True
        if message.message_type is MsgType.MESSAGE:
            if message.data is None:
                raise ValueError("message carries no data")
            self.messages.append(MessageData.from_json(message.data))
            return True
        return False

    def submit_message(self, text: str) -> None:
        """Send a chat line typed by the user."""
        message = WebSocketMessage(MsgType.MESSAGE, data=text)
        try:
            self.send(message.to_json())
        except (asyncio.QueueFull, ConnectionError) as exc:
            logger.debug("error sending to channel: %r", exc)

    def _profile(self, name: str) -> UserProfile:
        for profile in self.users:
            if profile.name == name:
                return profile
        raise LookupError(f"no user named {name!r}")

    def _render_user(self, profile: UserProfile) -> str:
        return (
            '<div class="flex m-3 bg-white rounded-lg p-2">'
            f'<div><img class="w-12 h-12 rounded-full" src="{escape(profile.avatar)}" alt="avatar"/></div>'
            '<div class="flex-grow p-3">'
            f'<div class="flex text-xs justify-between"><div>{escape(profile.name)}</div></div>'
            '<div class="text-xs text-gray-400">Hi there!</div>'
            "</div></div>"
        )

    def _render_message(self, message: MessageData, current: str) -> str:
        profile = self._profile(message.sender)
        css = _BUBBLE_CLASS + (" flex-row-reverse" if message.sender == current else "")
        if message.message.endswith(".gif"):
            body = f'<img class="mt-3" src="{escape(message.message)}"/>'
        else:
            body = escape(message.message)
        return (
            f'<div class="{css}">'
            f'<img class="w-8 h-8 rounded-full m-3" src="{escape(profile.avatar)}" alt="avatar"/>'
            '<div class="p-3">'
            f'<div class="text-sm">{escape(message.sender)}</div>'
            f'<div class="text-xs text-gray-500">{body}</div>'
            "</div></div>"
        )

    def render(self) -> str:
        """Render the chat screen as HTML."""
        current = self.user.username
        users_html = "".join(self._render_user(profile) for profile in self.users)
        messages_html = "".join(self._render_message(m, current) for m in self.messages)
        return (
            '<div class="flex w-screen">'
            '<div class="flex-none w-56 h-screen bg-gray-100">'
            f'<div class="text-xl p-3">Users</div>{users_html}</div>'
            '<div class="grow h-screen flex flex-col">'
            '<div class="w-full h-14 border-b-2 border-gray-300"><div class="text-xl p-3">💬 Chat!</div></div>'
            f'<div class="w-full grow overflow-auto border-b-2 border-gray-300">{messages_html}</div>'
            '<div class="w-full h-14 flex px-3 items-center">'
            '<input type="text" placeholder="Message" class="block w-full py-2 pl-4 mx-3 bg-gray-100 '
            'rounded-full outline-none focus:text-gray-700" name="message" required/>'
            '<button class="p-3 shadow-sm bg-blue-600 w-10 h-10 rounded-full flex justify-center '
            f'items-center color-white">{_SEND_ICON}</button>'
            "</div></div></div>"
        )