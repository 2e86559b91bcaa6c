"""Playback status of a track."""

from __future__ import annotations

import enum


class PlayMode(enum.Enum):
    """Whether a track is playing, paused, stopped or ended."""

    PLAY = "play"
    PAUSE = "pause"
    STOP = "stop"
    END = "end"

    def is_done(self) -> bool:
        """Whether the track has irreversibly stopped."""
        return self in (PlayMode.STOP, PlayMode.END)

    def change_to(self, other: PlayMode) -> PlayMode:
        """The mode after requesting ``other``; a finished track stays finished."""
        if self in (PlayMode.PLAY, PlayMode.PAUSE):
            return other
        return self