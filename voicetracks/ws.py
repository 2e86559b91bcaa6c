"""JSON messaging over a websocket that only carries text frames."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class TextMessage:
    """A text frame."""

    data: str


@dataclass(frozen=True)
class BinaryMessage:
    """A binary frame."""

    data: bytes


@dataclass(frozen=True)
class CloseMessage:
    """A close frame; ``code`` is None when no close payload was sent."""

    code: int | None = None
    reason: str = ""


@dataclass(frozen=True)
class PingMessage:
    """A ping frame."""

    data: bytes = b""


@dataclass(frozen=True)
class PongMessage:
    """A pong frame."""

    data: bytes = b""


class WsError(Exception):
    """A websocket operation failed."""


class JsonError(WsError):
    """A payload could not be encoded to or decoded from JSON."""


class UnexpectedBinaryMessage(WsError):
    """A binary frame arrived; the voice gateway only sends text."""

    def __init__(self, data: bytes) -> None:
        super().__init__(f"unexpected binary message of {len(data)} bytes")
        self.data = data


class WsClosed(WsError):
    """The peer closed the connection with a close frame."""

    def __init__(self, code: int, reason: str = "") -> None:
        super().__init__(f"websocket closed: {code} {reason}".rstrip())
        self.code = code
        self.reason = reason


class _Sink(Protocol):
    async def send(self, message: TextMessage) -> Any: ...


def convert_ws_message(message: Any) -> Any:
    """Decode a received frame into a JSON value, or None if it carries none."""
    match message:
        case TextMessage(data=payload):
            try:
                return json.loads(payload)
            except ValueError as exc:
                raise JsonError(str(exc)) from exc
        case BinaryMessage(data=data):
            raise UnexpectedBinaryMessage(data)
        case CloseMessage(code=code, reason=reason) if code is not None:
            raise WsClosed(code, reason)
        case _:
            # Ping and pong are handled by the websocket layer itself.
            return None


async def _next_message(stream: Any) -> Any:
    try:
        return await anext(stream)
    except StopAsyncIteration:
        return None
    except WsError:
        raise
    except Exception as exc:
        raise WsError(str(exc)) from exc


async def recv_json(stream: Any, timeout: float = 0.5) -> Any:
    """Receive one JSON value, or None if nothing arrives within ``timeout`` seconds."""
    try:
        message = await asyncio.wait_for(_next_message(stream), timeout)
    except asyncio.TimeoutError:
        message = None
    return convert_ws_message(message)


async def recv_json_no_timeout(stream: Any) -> Any:
    """Wait for and receive one JSON value; None once the stream has ended."""
    return convert_ws_message(await _next_message(stream))


async def send_json(sink: _Sink, value: Any) -> None:
    """Encode ``value`` as JSON and send it as a text frame."""
    try:
        payload = json.dumps(value)
    except (TypeError, ValueError) as exc:
        raise JsonError(str(exc)) from exc
    try:
        await sink.send(TextMessage(payload))
    except WsError:
        raise
    except Exception as exc:
        raise WsError(str(exc)) from exc