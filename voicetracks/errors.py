"""Errors raised when controlling or manipulating tracks."""


class TrackError(Exception):
    """Base class for failures to operate on a track or its handle.

    Unless stated otherwise, these do not invalidate an existing track;
    they report which operations and commands are valid.
    """

    reason = "track operation failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or f"failed to operate on track (handle): {self.reason}")


class TrackFinished(TrackError):
    """The track has ended, was removed on call closure, or the driver failed."""

    reason = "track ended"


class InvalidTrackEvent(TrackError):
    """The event listener can never fire on a track; attach it to the driver."""

    reason = "given event listener can't be fired on a track"


class SeekUnsupported(TrackError):
    """The track's underlying input does not support seeking."""

    reason = "track did not support seeking"