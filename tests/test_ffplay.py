"""Tests for the ffplay-backed streamer.

Process lifecycle tests drive the streamer with the POSIX `sleep` binary in
place of ffplay: the "URI" becomes the number of seconds to run.
"""

import asyncio
import os
import shutil

import pytest

from module.audio_player import FFplayStreamer, StreamError, StreamEvent, StreamState
from module.audio_player.streamer.ffplay import _source_for

SLEEP = shutil.which("sleep")
needs_sleep = pytest.mark.skipif(SLEEP is None or os.name != "posix", reason="needs POSIX sleep")


def test_source_for_file_uri():
    assert _source_for("file:///music/My%20Song.mp3") == "/music/My Song.mp3"


def test_source_for_remote_uri():
    assert _source_for("https://example.com/a.mp3") == "https://example.com/a.mp3"


def test_new_streamer_is_stopped():
    streamer = FFplayStreamer("ffplay")
    assert streamer.state() is StreamState.STOPPED


def test_start_without_source():
    with pytest.raises(StreamError):
        FFplayStreamer("ffplay").start()


def test_start_with_missing_binary(tmp_path):
    streamer = FFplayStreamer(str(tmp_path / "missing-ffplay"))
    streamer.queue("file:///music/a.mp3")
    with pytest.raises(StreamError) as exc:
        streamer.start()
    assert exc.value.uri == "file:///music/a.mp3"


def test_pause_and_stop_without_process_are_noops():
    streamer = FFplayStreamer("ffplay")
    streamer.pause()
    streamer.stop()
    assert streamer.state() is StreamState.STOPPED


@needs_sleep
def test_transport_lifecycle():
    streamer = FFplayStreamer(SLEEP, args=())
    streamer.queue("30")
    try:
        streamer.start()
        assert streamer.state() is StreamState.PLAYING

        streamer.pause()
        assert streamer.state() is StreamState.PAUSED

        streamer.start()
        assert streamer.state() is StreamState.PLAYING

        streamer.stop()
        assert streamer.state() is StreamState.STOPPED
    finally:
        streamer.shutdown()


@needs_sleep
def test_stop_while_paused_terminates():
    streamer = FFplayStreamer(SLEEP, args=())
    streamer.queue("30")
    try:
        streamer.start()
        streamer.pause()
        streamer.stop()
        assert streamer.state(timeout=5) is StreamState.STOPPED
    finally:
        streamer.shutdown()


@needs_sleep
def test_natural_exit_emits_completed():
    async def scenario():
        streamer = FFplayStreamer(SLEEP, args=())
        events = streamer.event_listener()
        streamer.queue("0")
        streamer.start()
        event = await asyncio.wait_for(events.get(), 5)
        return streamer, event

    streamer, event = asyncio.run(scenario())
    assert event is StreamEvent.COMPLETED
    assert streamer.state() is StreamState.STOPPED


@needs_sleep
def test_stop_does_not_emit_completed():
    async def scenario():
        streamer = FFplayStreamer(SLEEP, args=())
        events = streamer.event_listener()
        streamer.queue("30")
        streamer.start()
        streamer.stop()
        streamer.state(timeout=5)
        await asyncio.sleep(0.2)
        return events

    events = asyncio.run(scenario())
    assert events.empty()


@needs_sleep
def test_new_source_replaces_process():
    streamer = FFplayStreamer(SLEEP, args=())
    try:
        streamer.queue("30")
        streamer.start()
        first = streamer._process
        streamer.queue("31")
        streamer.start()
        assert streamer._process is not first
        assert first.poll() is not None
        assert streamer.state() is StreamState.PLAYING
    finally:
        streamer.shutdown()
