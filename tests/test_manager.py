import asyncio

import pytest

from module.audio_player import AudioSubsystemError, FFplayManager, init_audio_subsystem


def test_explicit_path_is_verified(monkeypatch):
    monkeypatch.setattr(FFplayManager, "_verify", lambda self, path: True)
    path = asyncio.run(init_audio_subsystem(path="/opt/ffplay"))
    assert path == "/opt/ffplay"


def test_unusable_explicit_path(monkeypatch):
    monkeypatch.setattr(FFplayManager, "_verify", lambda self, path: False)
    with pytest.raises(AudioSubsystemError):
        asyncio.run(init_audio_subsystem(path="/opt/ffplay"))


def test_prefers_system_path(monkeypatch, tmp_path):
    monkeypatch.setattr("shutil.which", lambda name: "/usr/bin/ffplay")
    monkeypatch.setattr(FFplayManager, "_verify", lambda self, path: True)
    manager = FFplayManager(cache_dir=str(tmp_path))
    assert asyncio.run(manager.ensure_ffplay()) == "/usr/bin/ffplay"
    assert manager.ffplay_path == "/usr/bin/ffplay"


def test_uses_cached_binary(monkeypatch, tmp_path):
    monkeypatch.setattr("shutil.which", lambda name: None)
    monkeypatch.setattr(FFplayManager, "_verify", lambda self, path: True)
    manager = FFplayManager(cache_dir=str(tmp_path))
    cached = tmp_path / manager.ffplay_name
    cached.write_bytes(b"")
    assert asyncio.run(manager.ensure_ffplay()) == str(cached)


def test_failed_download_raises(monkeypatch, tmp_path):
    monkeypatch.setattr("shutil.which", lambda name: None)

    async def no_download(self):
        return None

    monkeypatch.setattr(FFplayManager, "_download_ffplay", no_download)
    manager = FFplayManager(cache_dir=str(tmp_path))
    with pytest.raises(AudioSubsystemError):
        asyncio.run(manager.ensure_ffplay())


def test_verify_rejects_missing_binary(tmp_path):
    assert not FFplayManager()._verify(str(tmp_path / "nope"))
