"""Snapshot of a track's playback state."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta

from .looping import LoopState
from .mode import PlayMode


@dataclass
class TrackState:
    """State of a track, as passed to event handlers or requested by a handle."""

    playing: PlayMode = PlayMode.PLAY
    volume: float = 0.0
    position: timedelta = field(default_factory=timedelta)
    play_time: timedelta = field(default_factory=timedelta)
    loops: LoopState = field(default_factory=LoopState)

    def step_frame(self, timestep: timedelta) -> None:
        """Advance position and total play time by one frame of ``timestep``."""
        self.position += timestep
        self.play_time += timestep