import pytest

from module.audio_player import Track, TrackFormatError

RAW = {
    "id": 42,
    "track": 3,
    "title": "Title",
    "artist": "Artist",
    "album": "Album",
    "file": "file:///music/title.mp3",
}


def test_from_dict():
    track = Track.from_dict(RAW)
    assert track.id == 42
    assert track.file == "file:///music/title.mp3"


def test_structural_equality():
    assert Track.from_dict(RAW) == Track.from_dict(dict(RAW))
    assert Track.from_dict(RAW) != Track.from_dict({**RAW, "track": 4})


def test_track_is_immutable():
    track = Track.from_dict(RAW)
    with pytest.raises(AttributeError):
        track.title = "Other"


def test_from_dict_missing_field():
    raw = dict(RAW)
    del raw["file"]
    with pytest.raises(TrackFormatError) as exc:
        Track.from_dict(raw)
    assert exc.value.field == "file"


@pytest.mark.parametrize("field, value", [
    ("id", -1),
    ("id", 2 ** 64),
    ("track", 256),
    ("track", "3"),
    ("id", True),
])
def test_from_dict_rejects_out_of_range_numbers(field, value):
    with pytest.raises(TrackFormatError) as exc:
        Track.from_dict({**RAW, field: value})
    assert exc.value.field == field


def test_from_dict_rejects_empty_file():
    with pytest.raises(TrackFormatError):
        Track.from_dict({**RAW, "file": ""})


def test_from_path_builds_file_uri(tmp_path):
    path = tmp_path / "My Song.flac"
    path.write_bytes(b"")
    track = Track.from_path(str(path), id=7, track=1)
    assert track.title == "My Song"
    assert track.file.startswith("file://")
    assert "My%20Song.flac" in track.file
    assert str(track) == "My Song"
