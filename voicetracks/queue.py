"""A simple queue of tracks, played one after another."""

from __future__ import annotations

import logging
import threading
from collections import deque
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Protocol, TypeVar

from .errors import TrackError
from .handle import TrackHandle
from .track import Track, create_player

_log = logging.getLogger(__name__)

_PRELOAD_LEAD = timedelta(seconds=5)

_T = TypeVar("_T")


class _Driver(Protocol):
    def play(self, track: Track) -> Any: ...


@dataclass(frozen=True)
class TrackEndEvent:
    """Fires when a track stops or runs out of input."""

    def is_global_only(self) -> bool:
        """Track end events can be fired by a track."""
        return False


@dataclass(frozen=True)
class DelayedEvent:
    """Fires once a track has played for ``delay``."""

    delay: timedelta

    def is_global_only(self) -> bool:
        """Delayed events can be fired by a track."""
        return False


class Queued:
    """A handle to a track known to be part of a queue.

    Attribute access is forwarded to the wrapped handle. Instances should
    not be moved from one queue to another.
    """

    __slots__ = ("_handle",)

    def __init__(self, handle: TrackHandle) -> None:
        self._handle = handle

    def __getattr__(self, name: str) -> Any:
        if name == "_handle":
            raise AttributeError(name)
        return getattr(self._handle, name)

    def __repr__(self) -> str:
        return f"Queued({self._handle!r})"

    def handle(self) -> TrackHandle:
        """The wrapped track handle."""
        return self._handle


class _QueueCore:
    """State shared between a queue and the event handlers it installs."""

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.tracks: deque[Queued] = deque()


def _ended_handle(ctx: Any) -> TrackHandle | None:
    """The handle of the first ended track in a track event context."""
    if not isinstance(ctx, Sequence) or isinstance(ctx, (str, bytes)) or not ctx:
        return None
    entry = ctx[0]
    if not isinstance(entry, Sequence) or len(entry) != 2:
        return None
    return entry[1]


class QueueHandler:
    """Advances the queue when its head track ends."""

    def __init__(self, core: _QueueCore) -> None:
        self._core = core

    async def act(self, ctx: Any) -> None:
        """Pop the ended head track and start the next one that can play.

        ``ctx`` is a sequence of ``(state, handle)`` pairs for ended tracks;
        anything else is ignored.
        """
        ended = _ended_handle(ctx)
        if ended is None:
            return None

        with self._core.lock:
            tracks = self._core.tracks
            # Users may have reordered or removed tracks: only advance if
            # the track that ended is still the head.
            if not tracks or tracks[0].uuid() != ended.uuid():
                return None

            tracks.popleft()
            _log.info("Queued track ended: %r.", ctx)
            _log.info("%d tracks remain.", len(tracks))

            while tracks:
                try:
                    tracks[0].play()
                except TrackError:
                    _log.warning("Track in queue couldn't be played...")
                    tracks.popleft()
                else:
                    break
        return None


class SongPreloader:
    """Readies the track after the head shortly before the head ends."""

    def __init__(self, core: _QueueCore) -> None:
        self._core = core

    async def act(self, ctx: Any) -> None:
        """Ask the second queued track to become playable."""
        with self._core.lock:
            tracks = self._core.tracks
            if len(tracks) > 1:
                try:
                    tracks[1].handle().make_playable()
                except TrackError:
                    pass
        return None


class TrackQueue:
    """Plays several tracks in sequence, moving on as each one ends."""

    def __init__(self) -> None:
        self._core = _QueueCore()

    def __repr__(self) -> str:
        return f"TrackQueue(tracks={list(self._core.tracks)!r})"

    def add_source(self, source: Any, driver: _Driver) -> TrackHandle:
        """Create a track from ``source``, queue it on ``driver`` and return its handle."""
        track, handle = create_player(source)
        self.add(track, driver)
        return handle

    def add(self, track: Track, driver: _Driver) -> None:
        """Queue an already created track and hand it to ``driver``."""
        self.add_raw(track)
        driver.play(track)

    def add_raw(self, track: Track) -> None:
        """Install the queue's event handlers on ``track`` and append it."""
        _log.info("Track added to queue.")
        with self._core.lock:
            if self._core.tracks:
                track.pause()

            track.events.append((TrackEndEvent(), QueueHandler(self._core)))

            # Start loading the next track shortly before this one ends,
            # for near-gapless playback without holding everything in memory.
            duration = getattr(track.source.metadata, "duration", None)
            if duration is not None:
                preload_time = max(duration - _PRELOAD_LEAD, timedelta())
                track.events.append((DelayedEvent(preload_time), SongPreloader(self._core)))

            self._core.tracks.append(Queued(track.handle))

    def current(self) -> TrackHandle | None:
        """The handle of the track at the head of the queue."""
        with self._core.lock:
            return self._core.tracks[0].handle() if self._core.tracks else None

    def dequeue(self, index: int) -> Queued | None:
        """Remove and return the track at ``index``, or None if there is none."""

        def remove(tracks: deque[Queued]) -> Queued | None:
            if not 0 <= index < len(tracks):
                return None
            queued = tracks[index]
            del tracks[index]
            return queued

        return self.modify_queue(remove)

    def __len__(self) -> int:
        with self._core.lock:
            return len(self._core.tracks)

    def is_empty(self) -> bool:
        """Whether no tracks are queued."""
        return len(self) == 0

    def modify_queue(self, func: Callable[[deque[Queued]], _T]) -> _T:
        """Run ``func`` on the inner queue under its lock and return its result.

        Removed tracks should be stopped by the caller.
        """
        with self._core.lock:
            return func(self._core.tracks)

    def pause(self) -> None:
        """Pause the track at the head of the queue."""
        with self._core.lock:
            if self._core.tracks:
                self._core.tracks[0].pause()

    def resume(self) -> None:
        """Resume the track at the head of the queue."""
        with self._core.lock:
            if self._core.tracks:
                self._core.tracks[0].play()

    def stop(self) -> None:
        """Stop the current track and clear the queue."""
        with self._core.lock:
            while self._core.tracks:
                queued = self._core.tracks.popleft()
                try:
                    queued.stop()
                except TrackError:
                    # The track is already gone.
                    pass

    def skip(self) -> None:
        """Stop the head track so the queue moves on to the next one."""
        with self._core.lock:
            if self._core.tracks:
                self._core.tracks[0].stop()

    def current_queue(self) -> list[TrackHandle]:
        """A snapshot of the handles of all queued tracks, head first."""
        with self._core.lock:
            return [queued.handle() for queued in self._core.tracks]