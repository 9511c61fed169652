# Utils module
from .errors import (
    PlayerError,
    InvalidTransitionError,
    UnknownStreamStateError,
    StreamError,
    AudioSubsystemError,
    TrackFormatError,
)
from .decorators import handle_errors, log_operation

__all__ = [
    # Errors
    "PlayerError",
    "InvalidTransitionError",
    "UnknownStreamStateError",
    "StreamError",
    "AudioSubsystemError",
    "TrackFormatError",
    # Decorators
    "handle_errors",
    "log_operation",
]
