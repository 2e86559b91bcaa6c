# voicetracks

Controllable audio tracks for voice clients. The package has no dependencies
beyond the standard library.

A `Track` wraps an audio source and keeps its playback state: play mode, volume,
position, total play time and loop count. Code outside the mixing loop does not
touch a `Track` directly. It uses a `TrackHandle` instead, and the handle sends
commands over a thread-safe `CommandChannel`. The mixing code applies those
commands by calling `Track.process_commands`.

## Installation

```
pip install voicetracks
```

To run the test suite:

```
pip install "voicetracks[test]"
pytest
```

## Tracks and handles

```python
from datetime import timedelta
from voicetracks.track import create_player

track, handle = create_player(source)

handle.set_volume(0.5)
handle.pause()

messages = []
track.process_commands(0, messages.append)  # apply the queued commands
state = track.state()                       # a TrackState snapshot
track.step_frame(timedelta(milliseconds=20))
```

`source` can be any object with the following members:

- `is_seekable()`
- `seek_time(position)`, which returns the position it reached, or `None` if it cannot seek
- `make_playable()`
- a `metadata` attribute

`create_player` gives the track a random UUID. Use `create_player_with_uuid` to
choose the UUID yourself.

`process_commands(index, events)` passes each state change to `events`. A change
arrives as a `ChangeState(index, kind, value)`, where `kind` is a
`StateChangeKind`. An event registration arrives as an `AddTrackEvent`.

`await handle.get_info()` returns the track's `TrackState`. It waits until the
mixing code next processes commands. If the channel is closed first, it raises
`TrackFinished`.

Handle methods raise a subclass of `voicetracks.errors.TrackError` when they fail:

- `TrackFinished`: the command channel has been closed.
- `SeekUnsupported`: you tried to seek or loop on a source that cannot seek.
- `InvalidTrackEvent`: the event's `is_global_only()` returned true.

Looping takes a `LoopState`, either `LoopState.infinite()` or
`LoopState.finite(n)`. Play status is reported as a `PlayMode`. Once a track is
`STOP` or `END`, it stays in that mode.

## Queues

`voicetracks.queue.TrackQueue` holds tracks that play one after another. When you
add a track, the queue pauses it unless it is first in line. The queue also adds
two event pairs to `track.events`:

- `(TrackEndEvent(), QueueHandler)`
- `(DelayedEvent(...), SongPreloader)`, only when the source metadata has a
  `duration`. The delay is five seconds before the end.

```python
from voicetracks.queue import TrackQueue

queue = TrackQueue()
handle = queue.add_source(source, driver)  # driver.play(track) is called
queue.skip()
queue.current_queue()
queue.dequeue(1)
```

Other methods:

- `current()`
- `pause()`, `resume()` and `stop()`
- `modify_queue(func)`
- `is_empty()`
- `len(queue)`

## Websocket JSON

`voicetracks.ws` works with any async iterator of message objects (`TextMessage`,
`BinaryMessage`, `CloseMessage`, `PingMessage`, `PongMessage`) and any sink with
an async `send` method.

- `recv_json(stream, timeout=0.5)` returns `None` on timeout or at the end of the stream.
- `recv_json_no_timeout(stream)` waits without a time limit.
- `send_json(sink, value)` sends `value` as JSON text.
- `convert_ws_message(message)` decodes a single message.

Errors:

- A binary message raises `UnexpectedBinaryMessage`.
- A close frame with a code raises `WsClosed`.
- JSON that cannot be decoded or encoded raises `JsonError`.
- Any other failure is raised as a `WsError`.

## Test signals

`voicetracks.sine` builds sine-wave sample data:

- `make_sine(n, stereo)` gives little-endian 32-bit floats.
- `make_pcm_sine(n, stereo)` gives 16-bit PCM with an amplitude of 10 000.

## What it does not do

The package does not mix or decode audio. It provides no driver, it does not
fire track events, and it does not open websocket connections. You supply the
audio sources, the object with a `play(track)` method, the loop that calls
`process_commands` and `step_frame`, and the websocket stream.