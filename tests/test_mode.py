import pytest

from voicetracks.mode import PlayMode


@pytest.mark.parametrize(
    ("mode", "done"),
    [
        (PlayMode.PLAY, False),
        (PlayMode.PAUSE, False),
        (PlayMode.STOP, True),
        (PlayMode.END, True),
    ],
)
def test_is_done(mode, done):
    assert mode.is_done() is done


@pytest.mark.parametrize("start", [PlayMode.PLAY, PlayMode.PAUSE])
@pytest.mark.parametrize("target", list(PlayMode))
def test_live_modes_change_freely(start, target):
    assert start.change_to(target) is target


@pytest.mark.parametrize("start", [PlayMode.STOP, PlayMode.END])
@pytest.mark.parametrize("target", list(PlayMode))
def test_finished_modes_are_final(start, target):
    assert start.change_to(target) is start


def test_pause_then_resume():
    mode = PlayMode.PLAY.change_to(PlayMode.PAUSE)
    assert mode is PlayMode.PAUSE
    assert mode.change_to(PlayMode.PLAY) is PlayMode.PLAY