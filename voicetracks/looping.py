"""Looping behaviour of a track."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LoopState:
    """How many more times a track loops.

    ``remaining`` is ``None`` for endless looping, otherwise the count of
    loops still to play. The default, ``finite(0)``, stops the track once
    its input ends.
    """

    remaining: int | None = 0

    def __post_init__(self) -> None:
        if self.remaining is not None and self.remaining < 0:
            raise ValueError(f"loop count must not be negative, got {self.remaining}")

    @classmethod
    def infinite(cls) -> LoopState:
        """A state that loops until changed or stopped."""
        return cls(None)

    @classmethod
    def finite(cls, count: int) -> LoopState:
        """A state that loops ``count`` more times."""
        return cls(count)

    def is_infinite(self) -> bool:
        """Whether the track loops endlessly."""
        return self.remaining is None

    def __repr__(self) -> str:
        if self.remaining is None:
            return "LoopState.infinite()"
        return f"LoopState.finite({self.remaining})"