"""Fake streaming engine that records transport calls."""

import asyncio
from typing import List, Optional

from module.audio_player import StreamEvent, StreamState


class FakeStreamer:
    """Test double for the Streamable protocol.

    Keeps a native state string the same way a real engine would, so the
    player's live state queries go through StreamState.from_native.
    """

    def __init__(self) -> None:
        self.native = "null"
        self.uri: Optional[str] = None
        self.started: List[str] = []
        self.stop_count = 0
        self.pause_count = 0
        self.events: Optional[asyncio.Queue] = None

    def queue(self, uri: str) -> None:
        self.uri = uri

    def start(self) -> None:
        self.native = "playing"
        self.started.append(self.uri)

    def stop(self) -> None:
        self.native = "null"
        self.stop_count += 1

    def pause(self) -> None:
        self.native = "paused"
        self.pause_count += 1

    def state(self, timeout: Optional[float] = None) -> StreamState:
        return StreamState.from_native(self.native)

    def event_listener(self) -> asyncio.Queue:
        self.events = asyncio.Queue()
        return self.events

    def complete(self) -> None:
        """Simulate the current track running out."""
        self.native = "ready"
        self.events.put_nowait(StreamEvent.COMPLETED)
