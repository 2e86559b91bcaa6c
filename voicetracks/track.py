"""Live, controllable audio tracks."""

from __future__ import annotations

import copy
import enum
import uuid as uuid_module
from concurrent.futures import InvalidStateError
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Callable, Protocol
from uuid import UUID

from .command import (
    AddEvent,
    ChannelClosed,
    CommandChannel,
    Do,
    MakePlayable,
    Pause,
    Play,
    Request,
    Seek,
    SetLoop,
    SetVolume,
    Stop,
)
from .errors import SeekUnsupported
from .handle import TrackHandle
from .looping import LoopState
from .mode import PlayMode
from .state import TrackState


class _Source(Protocol):
    metadata: Any

    def is_seekable(self) -> bool: ...

    def seek_time(self, position: timedelta) -> timedelta | None: ...

    def make_playable(self) -> None: ...


class StateChangeKind(enum.Enum):
    """Which part of a track's state changed."""

    MODE = "mode"
    VOLUME = "volume"
    POSITION = "position"
    TOTAL = "total"
    LOOPS = "loops"


@dataclass(frozen=True)
class ChangeState:
    """Event message: the track at ``index`` changed ``kind`` to ``value``."""

    index: int
    kind: StateChangeKind
    value: Any


@dataclass(frozen=True)
class AddTrackEvent:
    """Event message: register ``event`` on the track at ``index``."""

    index: int
    event: Any


class Track:
    """Audio playback control object, normally driven through its handle."""

    def __init__(self, source: _Source, commands: CommandChannel, handle: TrackHandle) -> None:
        self.source = source
        self.commands = commands
        self.handle = handle
        self.events: list[Any] = []
        self.loops = LoopState.finite(0)
        self._playing = PlayMode.PLAY
        self._volume = 1.0
        self._position = timedelta()
        self._play_time = timedelta()
        self._uuid = handle.uuid()

    def __repr__(self) -> str:
        return (
            f"Track(uuid={self._uuid}, playing={self._playing}, volume={self._volume}, "
            f"position={self._position}, loops={self.loops!r})"
        )

    def _set_playing(self, new_state: PlayMode) -> Track:
        self._playing = self._playing.change_to(new_state)
        return self

    def play(self) -> Track:
        """Resume the track if it is paused."""
        return self._set_playing(PlayMode.PLAY)

    def pause(self) -> Track:
        """Pause the track if it is playing."""
        return self._set_playing(PlayMode.PAUSE)

    def stop(self) -> Track:
        """Stop the track; a stopped track cannot be restarted."""
        return self._set_playing(PlayMode.STOP)

    def end(self) -> Track:
        """Mark the track as naturally ended."""
        return self._set_playing(PlayMode.END)

    def playing(self) -> PlayMode:
        """The current play status."""
        return self._playing

    def set_volume(self, volume: float) -> Track:
        """Set the volume, returning the track for chaining."""
        self._volume = volume
        return self

    def volume(self) -> float:
        """The current volume."""
        return self._volume

    def position(self) -> timedelta:
        """The current playback position."""
        return self._position

    def play_time(self) -> timedelta:
        """Total time this track has been active."""
        return self._play_time

    def set_loops(self, loops: LoopState) -> None:
        """Set the loop state; raises SeekUnsupported if the input cannot seek."""
        if not self.source.is_seekable():
            raise SeekUnsupported()
        self.loops = loops

    def do_loop(self) -> bool:
        """Consume one loop if any remain, reporting whether the track loops again."""
        remaining = self.loops.remaining
        if remaining is None:
            return True
        if remaining == 0:
            return False
        self.loops = LoopState.finite(remaining - 1)
        return True

    def step_frame(self, timestep: timedelta) -> None:
        """Advance the playback position and play time by one frame."""
        self._position += timestep
        self._play_time += timestep

    def process_commands(self, index: int, events: Callable[[Any], None]) -> None:
        """Apply every pending handle command, reporting changes to ``events``."""

        def emit(message: Any) -> None:
            try:
                events(message)
            except ChannelClosed:
                pass

        while (cmd := self.commands.try_recv()) is not None:
            match cmd:
                case Play():
                    self.play()
                    emit(ChangeState(index, StateChangeKind.MODE, self._playing))
                case Pause():
                    self.pause()
                    emit(ChangeState(index, StateChangeKind.MODE, self._playing))
                case Stop():
                    self.stop()
                    emit(ChangeState(index, StateChangeKind.MODE, self._playing))
                case SetVolume(volume=volume):
                    self.set_volume(volume)
                    emit(ChangeState(index, StateChangeKind.VOLUME, self._volume))
                case Seek(position=position):
                    try:
                        new_time = self.seek_time(position)
                    except SeekUnsupported:
                        continue
                    emit(ChangeState(index, StateChangeKind.POSITION, new_time))
                case AddEvent(event=event):
                    emit(AddTrackEvent(index, event))
                case Do(action=action):
                    action(self)
                    emit(ChangeState(index, StateChangeKind.TOTAL, self.state()))
                case Request(reply=reply):
                    if not reply.done():
                        try:
                            reply.set_result(self.state())
                        except InvalidStateError:
                            pass
                case SetLoop(loops=loops):
                    try:
                        self.set_loops(loops)
                    except SeekUnsupported:
                        continue
                    emit(ChangeState(index, StateChangeKind.LOOPS, self.loops))
                case MakePlayable():
                    self.make_playable()

    def make_playable(self) -> None:
        """Ready a lazily initialised input for playing."""
        self.source.make_playable()

    def state(self) -> TrackState:
        """A read-only copy of the track's state."""
        return TrackState(
            playing=self._playing,
            volume=self._volume,
            position=self._position,
            play_time=self._play_time,
            loops=self.loops,
        )

    def seek_time(self, position: timedelta) -> timedelta:
        """Seek to ``position``, returning where playback actually landed."""
        landed = self.source.seek_time(position)
        if landed is None:
            raise SeekUnsupported()
        self._position = landed
        return landed

    def uuid(self) -> UUID:
        """This track's unique identifier."""
        return self._uuid


def create_player(source: _Source) -> tuple[Track, TrackHandle]:
    """Create a track and its handle from an input, with a random identifier."""
    return create_player_with_uuid(source, uuid_module.uuid4())


def create_player_with_uuid(source: _Source, uuid: UUID) -> tuple[Track, TrackHandle]:
    """Create a track and its handle from an input, with the given identifier."""
    channel = CommandChannel()
    handle = TrackHandle(channel, source.is_seekable(), uuid, copy.copy(source.metadata))
    return Track(source, channel, handle), handle