# Core module
from .track import Track
from .queue import PlayQueue
from .state import StreamState, StreamEvent
from .player import Player, PlayerCommand, PlayerSender, CommandKind, bridge_completion

__all__ = [
    "Track",
    "PlayQueue",
    "StreamState",
    "StreamEvent",
    "Player",
    "PlayerCommand",
    "PlayerSender",
    "CommandKind",
    "bridge_completion",
]
