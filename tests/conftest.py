import pytest

from module.audio_player import Track
from mocks.fake_streamer import FakeStreamer


def make_track(n: int) -> Track:
    return Track(
        id=n,
        track=n,
        title=f"Song {n}",
        artist="Artist",
        album="Album",
        file=f"file:///music/{n:02d}.mp3",
    )


@pytest.fixture
def track_a():
    return make_track(1)


@pytest.fixture
def track_b():
    return make_track(2)


@pytest.fixture
def streamer():
    return FakeStreamer()
