import asyncio
import json
from types import SimpleNamespace

import pytest

from wschat.chat import AVATAR_TEMPLATE, Chat, UserProfile
from wschat.event_bus import EventBus
from wschat.protocol import MessageData


def users_json(*names):
    return json.dumps({"messageType": "users", "dataArray": list(names), "data": None})


def message_json(sender, text):
    inner = json.dumps({"from": sender, "message": text})
    return json.dumps({"messageType": "message", "dataArray": None, "data": inner})


def make_chat(name="alice"):
    sent = []
    chat = Chat(SimpleNamespace(username=name), sent.append)
    return chat, sent


def test_creation_registers_user():
    _, sent = make_chat("alice")
    assert [json.loads(s) for s in sent] == [
        {"messageType": "register", "dataArray": None, "data": "alice"}
    ]


def test_registration_failure_is_ignored():
    def full(text):
        raise asyncio.QueueFull

    chat = Chat(SimpleNamespace(username="alice"), full)
    assert chat.users == []


def test_profile_avatar_uses_name_as_seed():
    profile = UserProfile.from_name("bob")
    assert profile == UserProfile("bob", AVATAR_TEMPLATE.format("bob"))
    assert profile.avatar.endswith("seed=bob")


def test_users_message_replaces_list():
    chat, _ = make_chat()
    assert chat.handle_message(users_json("alice", "bob")) is True
    assert [u.name for u in chat.users] == ["alice", "bob"]
    assert chat.handle_message(users_json("carol")) is True
    assert chat.users == [UserProfile.from_name("carol")]


def test_users_message_without_array_clears_list():
    chat, _ = make_chat()
    chat.handle_message(users_json("alice"))
    assert chat.handle_message('{"messageType":"users"}') is True
    assert chat.users == []


def test_chat_message_appended():
    chat, _ = make_chat()
    assert chat.handle_message(message_json("bob", "hi")) is True
    assert chat.messages == [MessageData("bob", "hi")]


def test_register_message_from_server_changes_nothing():
    chat, _ = make_chat()
    assert chat.handle_message('{"messageType":"register","data":"x"}') is False
    assert chat.messages == [] and chat.users == []


@pytest.mark.parametrize("text", ["garbage", '{"messageType":"message"}', '{"messageType":"message","data":"{}"}'])
def test_bad_server_messages_raise(text):
    chat, _ = make_chat()
    with pytest.raises(ValueError):
        chat.handle_message(text)


def test_submit_message_sends_envelope():
    chat, sent = make_chat()
    chat.submit_message("hello")
    assert json.loads(sent[-1]) == {"messageType": "message", "dataArray": None, "data": "hello"}


def test_submit_failure_is_swallowed():
    calls = []

    def closed(text):
        calls.append(text)
        raise ConnectionError

    chat = Chat(SimpleNamespace(username="alice"), closed)
    chat.submit_message("hello")
    assert len(calls) == 2
    assert json.loads(calls[0]) == {"messageType": "register", "dataArray": None, "data": "alice"}
    assert json.loads(calls[1]) == {"messageType": "message", "dataArray": None, "data": "hello"}
    assert chat.messages == []


def test_bus_delivers_to_chat():
    bus = EventBus()
    chat = Chat(SimpleNamespace(username="alice"), lambda text: None, bus)
    bus.send(users_json("alice", "bob"))
    assert [u.name for u in chat.users] == ["alice", "bob"]


def test_render_lists_users_and_messages():
    chat, _ = make_chat("alice")
    chat.handle_message(users_json("alice", "bob"))
    chat.handle_message(message_json("bob", "hi <there>"))
    chat.handle_message(message_json("alice", "mine"))
    page = chat.render()
    assert "💬 Chat!" in page
    assert "hi &lt;there&gt;" in page
    assert page.count("flex-row-reverse") == 1
    assert page.index("flex-row-reverse") > page.index("hi &lt;there&gt;")
    assert page.count("Hi there!") == 2


def test_render_gif_as_image():
    chat, _ = make_chat()
    chat.handle_message(users_json("bob"))
    chat.handle_message(message_json("bob", "cat.gif"))
    assert '<img class="mt-3" src="cat.gif"/>' in chat.render()


def test_render_unknown_sender_raises():
    chat, _ = make_chat()
    chat.handle_message(message_json("ghost", "boo"))
    with pytest.raises(LookupError):
        chat.render()