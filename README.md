# wschat

wschat is a small terminal chat client. It connects to a chat server over
WebSocket (by default `ws://127.0.0.1:8080`), registers under a username,
prints the list of users the server reports and the messages they send, and
sends each line you type as a chat message.

## Installation

```
pip install .
```

To run the tests, install the test extra and run pytest:

```
pip install .[test]
pytest
```

## Running

```
wschat --username alice
```

Options:

- `--username NAME`: the name to chat under. Required and must be non-empty
  unless `--render` is given.
- `--url URL`: the chat server address (default `ws://127.0.0.1:8080`).
- `--render PATH`: print the HTML page for `PATH` (`/` for the login page,
  `/chat` for the chat page, anything else for the not-found page) and exit
  without connecting.
- `--debug`: log debug output.

While connected, every non-empty line read from standard input is sent as a
message. When the server sends a new chat message it is printed as
`sender: message`; when it sends a new user list it is printed as
`Users: name, name, ...`. The client stops when standard input ends or the
server closes the connection. It exits with status 1 if the connection
cannot be made and 130 when interrupted.

## Protocol

Every frame is a JSON object with a `messageType` of `users`, `register` or
`message`, plus `data` (a string or null) and `dataArray` (a list of strings
or null):

- `register`: the client sends this once, with its username in `data`.
- `users`: the server sends the current user list in `dataArray`.
- `message`: the client sends the message text in `data`. The server
  broadcasts a `message` whose `data` is itself a JSON object with the
  string fields `from` and `message`.

Malformed frames raise `ValueError` when decoded.

## Using it as a library

- `wschat.protocol`: `MsgType`, `WebSocketMessage` (`to_json`, `from_json`)
  and `MessageData` (`from_json`, with fields `sender` and `message`).
- `wschat.event_bus.EventBus`: `connect(handler)` returns a handler id,
  `disconnect(handler_id)` removes it, and `send(message)` passes a message
  to every connected handler.
- `wschat.websocket.WebsocketService(bus, url)`: `send(text)` queues a frame
  (up to 1000; `asyncio.QueueFull` beyond that, `ConnectionError` once
  closed), `await run()` connects, writes queued frames and publishes
  incoming text frames (and UTF-8 binary frames) on the bus, and
  `await close()` shuts it down.
- `wschat.chat`: `UserProfile.from_name(name)` builds a profile with an
  avatar link, and `Chat(user, send, bus=None)` registers the user on
  creation, applies server frames with `handle_message(text)` (returning
  whether the view changed), sends lines with `submit_message(text)` and
  renders the chat page as HTML with `render()`. A message whose text ends
  in `.gif` is rendered as an image; rendering a message from a sender not
  in the user list raises `LookupError`.
- `wschat.app`: `Route` (`from_path` maps unknown paths to `NOT_FOUND`),
  `User`, `render_login(user, username=None)`, `switch(route, user, chat)`
  and the `main(argv=None)` entry point.

## What it does not do

wschat is only a client: it includes no chat server. Its pages are static
HTML strings; there is no browser or interactive graphical interface, and
the terminal client takes the username from `--username` rather than from a
login screen.