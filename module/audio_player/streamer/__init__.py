# Streamer module
from .base import Streamable
from .ffplay import FFplayStreamer
from .manager import FFplayManager, init_audio_subsystem

__all__ = ["Streamable", "FFplayStreamer", "FFplayManager", "init_audio_subsystem"]
