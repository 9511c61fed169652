"""
音訊播放器模組

單一串流播放器，提供:
- 依序播放的曲目佇列
- 透過非同步指令通道的傳輸控制
- 以 ffplay 作為串流引擎
- 自動取得 ffplay
"""

# Core
from .core.track import Track
from .core.queue import PlayQueue
from .core.state import StreamState, StreamEvent
from .core.player import Player, PlayerCommand, PlayerSender, CommandKind, bridge_completion

# Streamer
from .streamer.base import Streamable
from .streamer.ffplay import FFplayStreamer
from .streamer.manager import FFplayManager, init_audio_subsystem

# Utils
from .utils.errors import (
    PlayerError,
    InvalidTransitionError,
    UnknownStreamStateError,
    StreamError,
    AudioSubsystemError,
    TrackFormatError,
)

__all__ = [
    # Core
    "Track",
    "PlayQueue",
    "StreamState",
    "StreamEvent",
    "Player",
    "PlayerCommand",
    "PlayerSender",
    "CommandKind",
    "bridge_completion",
    # Streamer
    "Streamable",
    "FFplayStreamer",
    "FFplayManager",
    "init_audio_subsystem",
    # Utils
    "PlayerError",
    "InvalidTransitionError",
    "UnknownStreamStateError",
    "StreamError",
    "AudioSubsystemError",
    "TrackFormatError",
]
