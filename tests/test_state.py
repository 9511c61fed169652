import pytest

from module.audio_player import StreamState, UnknownStreamStateError


@pytest.mark.parametrize("native, expected", [
    ("playing", StreamState.PLAYING),
    ("paused", StreamState.PAUSED),
    ("null", StreamState.STOPPED),
    ("ready", StreamState.STOPPED),
    ("void-pending", StreamState.STOPPED),
])
def test_from_native(native, expected):
    assert StreamState.from_native(native) is expected


@pytest.mark.parametrize("native", ["buffering", "", None, ["playing"]])
def test_unknown_native_state_is_fatal(native):
    with pytest.raises(UnknownStreamStateError) as exc:
        StreamState.from_native(native)
    assert exc.value.native_state == native
