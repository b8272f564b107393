"""JSON messages exchanged with the chat server."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any


class MsgType(str, Enum):
    """Kinds of message on the wire."""

    USERS = "users"
    REGISTER = "register"
    MESSAGE = "message"


def _load_object(text: str) -> dict[str, Any]:
    value = json.loads(text)
    if not isinstance(value, dict):
        raise ValueError("expected a JSON object")
    return value


def _optional_str(value: Any, field: str) -> str | None:
    if value is None or isinstance(value, str):
        return value
    raise ValueError(f"field {field!r} must be a string or null")


def _required_str(obj: dict[str, Any], field: str) -> str:
    if field not in obj:
        raise ValueError(f"missing field {field!r}")
    value = obj[field]
    if not isinstance(value, str):
        raise ValueError(f"field {field!r} must be a string")
    return value


@dataclass(frozen=True)
class WebSocketMessage:
    """An envelope carrying a type and either a string or a list of strings."""

    message_type: MsgType
    data_array: tuple[str, ...] | None = None
    data: str | None = None

    def to_json(self) -> str:
        """Serialise to the compact camelCase JSON the server expects."""
        payload = {
            "messageType": self.message_type.value,
            "dataArray": None if self.data_array is None else list(self.data_array),
            "data": self.data,
        }
        return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))

    @classmethod
    def from_json(cls, text: str) -> WebSocketMessage:
        """Parse an envelope; raise ValueError if it is malformed."""
        obj = _load_object(text)
        raw_type = _required_str(obj, "messageType")
        try:
            message_type = MsgType(raw_type)
        except ValueError:
            raise ValueError(f"unknown message type {raw_type!r}") from None
        raw_array = obj.get("dataArray")
        if raw_array is None:
            data_array = None
        elif isinstance(raw_array, list) and all(isinstance(item, str) for item in raw_array):
            data_array = tuple(raw_array)
        else:
            raise ValueError("field 'dataArray' must be a list of strings or null")
        return cls(message_type, data_array, _optional_str(obj.get("data"), "data"))


@dataclass(frozen=True)
class MessageData:
    """A chat line: who sent it and what it says."""

    sender: str
    message: str

    @classmethod
    def from_json(cls, text: str) -> MessageData:
        """Parse ``{"from": ..., "message": ...}``; raise ValueError if malformed."""
        obj = _load_object(text)
        return cls(_required_str(obj, "from"), _required_str(obj, "message"))