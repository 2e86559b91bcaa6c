"""Controllable audio tracks, track queues, websocket JSON helpers and sine test data."""

__version__ = "0.1.0"

__all__ = [
    "command",
    "errors",
    "handle",
    "looping",
    "mode",
    "queue",
    "sine",
    "state",
    "track",
    "ws",
]