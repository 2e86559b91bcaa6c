import dataclasses

import pytest

from voicetracks.looping import LoopState


def test_default_is_finite_zero():
    assert LoopState() == LoopState.finite(0)
    assert LoopState().remaining == 0
    assert not LoopState().is_infinite()


def test_infinite():
    state = LoopState.infinite()
    assert state.is_infinite()
    assert state.remaining is None
    assert state != LoopState.finite(0)


def test_finite_keeps_count():
    state = LoopState.finite(3)
    assert state.remaining == 3
    assert not state.is_infinite()
    assert state == LoopState.finite(3)
    assert state != LoopState.finite(2)


def test_negative_count_rejected():
    with pytest.raises(ValueError):
        LoopState.finite(-1)


def test_frozen():
    state = LoopState.finite(1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        state.remaining = 5  # type: ignore[misc]
    assert state.remaining == 1


def test_hashable_and_repr():
    states = {LoopState.finite(2), LoopState.finite(2), LoopState.infinite()}
    assert len(states) == 2
    assert repr(LoopState.infinite()) == "LoopState.infinite()"
    assert repr(LoopState.finite(2)) == "LoopState.finite(2)"