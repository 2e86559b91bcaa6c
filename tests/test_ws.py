import asyncio

import pytest

from voicetracks.ws import (
    BinaryMessage,
    CloseMessage,
    JsonError,
    PingMessage,
    PongMessage,
    TextMessage,
    UnexpectedBinaryMessage,
    WsClosed,
    WsError,
    convert_ws_message,
    recv_json,
    recv_json_no_timeout,
    send_json,
)

_END = object()


class FakeStream:
    def __init__(self, *items):
        self._queue = asyncio.Queue()
        for item in items:
            self._queue.put_nowait(item)

    def __aiter__(self):
        return self

    async def __anext__(self):
        item = await self._queue.get()
        if item is _END:
            raise StopAsyncIteration
        if isinstance(item, Exception):
            raise item
        return item


class FakeSink:
    def __init__(self, failure=None):
        self.sent = []
        self.failure = failure

    async def send(self, message):
        if self.failure is not None:
            raise self.failure
        self.sent.append(message)


def test_convert_text_decodes_json():
    assert convert_ws_message(TextMessage('{"op": 3, "d": [1, 2]}')) == {"op": 3, "d": [1, 2]}


def test_convert_invalid_json_raises():
    with pytest.raises(JsonError):
        convert_ws_message(TextMessage("{not json"))


def test_convert_binary_raises_with_payload():
    with pytest.raises(UnexpectedBinaryMessage) as info:
        convert_ws_message(BinaryMessage(b"\x01\x02"))
    assert info.value.data == b"\x01\x02"
    assert isinstance(info.value, WsError)


def test_convert_close_with_frame_raises():
    with pytest.raises(WsClosed) as info:
        convert_ws_message(CloseMessage(4006, "session invalid"))
    assert info.value.code == 4006
    assert info.value.reason == "session invalid"


@pytest.mark.parametrize(
    "message", [None, CloseMessage(), PingMessage(b"x"), PongMessage(b"y")]
)
def test_convert_messages_without_payload(message):
    assert convert_ws_message(message) is None


@pytest.mark.asyncio
async def test_recv_json_returns_value():
    stream = FakeStream(TextMessage('{"op": 8}'))
    assert await recv_json(stream) == {"op": 8}


@pytest.mark.asyncio
async def test_recv_json_times_out_to_none():
    stream = FakeStream()
    assert await recv_json(stream, timeout=0.01) is None
    stream._queue.put_nowait(TextMessage("[true]"))
    assert await recv_json(stream, timeout=1) == [True]


@pytest.mark.asyncio
async def test_recv_json_ended_stream():
    assert await recv_json(FakeStream(_END)) is None


@pytest.mark.asyncio
async def test_recv_json_wraps_stream_error():
    failure = ConnectionResetError("reset")
    with pytest.raises(WsError) as info:
        await recv_json(FakeStream(failure))
    assert info.value.__cause__ is failure


@pytest.mark.asyncio
async def test_recv_json_propagates_close():
    with pytest.raises(WsClosed):
        await recv_json(FakeStream(CloseMessage(1000)))


@pytest.mark.asyncio
async def test_recv_json_no_timeout_reads_in_order():
    stream = FakeStream(TextMessage('"first"'), PingMessage(), TextMessage('"second"'), _END)
    results = [await recv_json_no_timeout(stream) for _ in range(4)]
    assert results == ["first", None, "second", None]


@pytest.mark.asyncio
async def test_recv_json_no_timeout_binary_raises():
    with pytest.raises(UnexpectedBinaryMessage):
        await recv_json_no_timeout(FakeStream(BinaryMessage(b"zz")))


@pytest.mark.asyncio
async def test_send_json_round_trip():
    sink = FakeSink()
    value = {"op": 1, "d": {"protocol": "udp", "ok": True, "n": None}}
    await send_json(sink, value)
    assert len(sink.sent) == 1
    assert isinstance(sink.sent[0], TextMessage)
    assert convert_ws_message(sink.sent[0]) == value


@pytest.mark.asyncio
async def test_send_json_unserializable_raises():
    sink = FakeSink()
    with pytest.raises(JsonError):
        await send_json(sink, {"bad": object()})
    assert sink.sent == []


@pytest.mark.asyncio
async def test_send_json_wraps_sink_failure():
    failure = OSError("broken pipe")
    with pytest.raises(WsError) as info:
        await send_json(FakeSink(failure), {"op": 3})
    assert info.value.__cause__ is failure