import main


def test_parse_args():
    args = main.parse_args(["a.mp3", "b.mp3", "--loop"])
    assert args.files == ["a.mp3", "b.mp3"]
    assert args.loop is True


def test_loop_defaults_to_unset():
    assert main.parse_args(["a.mp3"]).loop is None


def test_env_flag(monkeypatch):
    monkeypatch.setenv("PLAYER_LOOP", "yes")
    assert main.env_flag("PLAYER_LOOP")
    monkeypatch.setenv("PLAYER_LOOP", "0")
    assert not main.env_flag("PLAYER_LOOP")
