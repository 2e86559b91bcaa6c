"""Thread-safe remote control of a track."""

from __future__ import annotations

import asyncio
from concurrent.futures import Future
from datetime import timedelta
from typing import TYPE_CHECKING, Any, Callable
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
    TrackCommand,
)
from .errors import InvalidTrackEvent, SeekUnsupported, TrackFinished
from .looping import LoopState

if TYPE_CHECKING:
    from .state import TrackState


class TrackHandle:
    """Controls a track from outside the mixing context by sending it commands.

    Handles are shared by reference: every holder sees the same channel,
    metadata and typemap. Most calls raise ``TrackFinished`` once the track
    has gone away.
    """

    def __init__(
        self,
        command_channel: CommandChannel,
        seekable: bool,
        uuid: UUID,
        metadata: Any,
    ) -> None:
        self._channel = command_channel
        self._seekable = bool(seekable)
        self._uuid = uuid
        self._metadata = metadata
        self._typemap: dict[Any, Any] = {}

    def __repr__(self) -> str:
        return (
            f"TrackHandle(uuid={self._uuid}, seekable={self._seekable}, "
            f"metadata={self._metadata!r})"
        )

    def play(self) -> None:
        """Unpause the track."""
        self.send(Play())

    def pause(self) -> None:
        """Pause the track."""
        self.send(Pause())

    def stop(self) -> None:
        """Stop the track for good."""
        self.send(Stop())

    def set_volume(self, volume: float) -> None:
        """Set the track's volume."""
        self.send(SetVolume(volume))

    def make_playable(self) -> None:
        """Ready a lazily initialised track for playing."""
        self.send(MakePlayable())

    def is_seekable(self) -> bool:
        """Whether the underlying input supports arbitrary seeking."""
        return self._seekable

    def _require_seekable(self) -> None:
        if not self._seekable:
            raise SeekUnsupported()

    def seek_time(self, position: timedelta) -> None:
        """Seek the track to ``position``; raises SeekUnsupported if it cannot seek."""
        self._require_seekable()
        self.send(Seek(position))

    def add_event(self, event: Any, action: Any) -> None:
        """Attach ``action`` to ``event`` on the track.

        Events that only the global context can fire raise InvalidTrackEvent.
        """
        global_only = getattr(event, "is_global_only", None)
        if global_only is not None and global_only():
            raise InvalidTrackEvent()
        self.send(AddEvent((event, action)))

    def action(self, action: Callable[[Any], None]) -> None:
        """Run a quick synchronous callable on the track object itself."""
        self.send(Do(action))

    async def get_info(self) -> TrackState:
        """Request the track's current playback state."""
        reply: Future[TrackState] = Future()
        self.send(Request(reply))
        return await asyncio.wrap_future(reply)

    def enable_loop(self) -> None:
        """Loop the track endlessly."""
        self._require_seekable()
        self.send(SetLoop(LoopState.infinite()))

    def disable_loop(self) -> None:
        """Stop the track from looping."""
        self._require_seekable()
        self.send(SetLoop(LoopState.finite(0)))

    def loop_for(self, count: int) -> None:
        """Loop the track ``count`` more times."""
        self._require_seekable()
        self.send(SetLoop(LoopState.finite(count)))

    def uuid(self) -> UUID:
        """The unique identifier of this handle and its track."""
        return self._uuid

    def metadata(self) -> Any:
        """Metadata copied from the input when the track was created."""
        return self._metadata

    def typemap(self) -> dict[Any, Any]:
        """User data shared by everyone holding this handle."""
        return self._typemap

    def send(self, cmd: TrackCommand) -> None:
        """Send a raw command to the track."""
        try:
            self._channel.send(cmd)
        except ChannelClosed as exc:
            raise TrackFinished() from exc