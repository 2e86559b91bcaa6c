"""Commands sent from track handles to tracks, and the channel carrying them."""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Callable
from concurrent.futures import Future
from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING, Any

from .errors import TrackFinished
from .looping import LoopState

if TYPE_CHECKING:
    from .state import TrackState


class TrackCommand:
    """A request from a track handle to modify or act upon a track."""

    __slots__ = ()


@dataclass(frozen=True)
class Play(TrackCommand):
    """Set the track to play or resume."""


@dataclass(frozen=True)
class Pause(TrackCommand):
    """Pause the track."""


@dataclass(frozen=True)
class Stop(TrackCommand):
    """Stop the track; this cannot be undone."""


@dataclass(frozen=True)
class SetVolume(TrackCommand):
    """Set the track's volume."""

    volume: float


@dataclass(frozen=True)
class Seek(TrackCommand):
    """Seek to the given position."""

    position: timedelta


@dataclass(frozen=True)
class AddEvent(TrackCommand):
    """Register an event on the track."""

    event: Any


@dataclass(frozen=True)
class Do(TrackCommand):
    """Run a callable with direct access to the track."""

    action: Callable[[Any], None]

    def __repr__(self) -> str:
        return "Do([function])"


@dataclass(frozen=True)
class Request(TrackCommand):
    """Ask for a copy of the track's state, delivered through ``reply``."""

    reply: Future[TrackState]


@dataclass(frozen=True)
class SetLoop(TrackCommand):
    """Change the loop count or strategy of the track."""

    loops: LoopState


@dataclass(frozen=True)
class MakePlayable(TrackCommand):
    """Prompt the track's input to become live, if it is not already."""


class ChannelClosed(Exception):
    """The receiving side of a command channel has gone away."""


class CommandChannel:
    """An unbounded, thread-safe queue of track commands."""

    def __init__(self) -> None:
        self._queue: deque[TrackCommand] = deque()
        self._lock = threading.Lock()
        self._closed = False

    def send(self, command: TrackCommand) -> None:
        """Queue a command; raises ChannelClosed once the channel is closed."""
        with self._lock:
            if self._closed:
                raise ChannelClosed("command channel is closed")
            self._queue.append(command)

    def try_recv(self) -> TrackCommand | None:
        """The oldest pending command, or None when none is waiting."""
        with self._lock:
            return self._queue.popleft() if self._queue else None

    def close(self) -> None:
        """Close the channel, dropping pending commands.

        Pending state requests are failed with TrackFinished.
        """
        with self._lock:
            self._closed = True
            pending = list(self._queue)
            self._queue.clear()
        for command in pending:
            if isinstance(command, Request) and not command.reply.done():
                command.reply.set_exception(TrackFinished())

    def is_closed(self) -> bool:
        """Whether the channel no longer accepts commands."""
        with self._lock:
            return self._closed