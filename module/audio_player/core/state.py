"""
串流狀態

狀態每次都從串流引擎即時查詢，不在播放器內快取，
避免預期狀態和引擎實際狀態脫鉤。
"""

from enum import Enum

from ..utils.errors import UnknownStreamStateError


class StreamState(Enum):
    """串流引擎的傳輸狀態"""

    PLAYING = "playing"
    PAUSED = "paused"
    STOPPED = "stopped"

    @classmethod
    def from_native(cls, native: str) -> "StreamState":
        """
        將引擎原生狀態轉換為 StreamState

        Args:
            native: 引擎回報的狀態字串

        Raises:
            UnknownStreamStateError: 引擎回報了未建模的狀態
        """
        try:
            return _NATIVE_STATES[native]
        except (KeyError, TypeError):
            raise UnknownStreamStateError(native) from None


_NATIVE_STATES = {
    "playing": StreamState.PLAYING,
    "paused": StreamState.PAUSED,
    "null": StreamState.STOPPED,
    "ready": StreamState.STOPPED,
    "void-pending": StreamState.STOPPED,
}


class StreamEvent(Enum):
    """串流引擎送出的事件"""

    # 當前曲目即將播完
    COMPLETED = "completed"
