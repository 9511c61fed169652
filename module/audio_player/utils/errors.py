"""
音訊播放器統一錯誤系統

所有錯誤都繼承自 PlayerError，包含：
- message: 技術性錯誤訊息（給開發者 / log）
- user_message: 使用者友善的訊息（給終端機顯示）

這些錯誤都視為致命錯誤：指令迴圈遇到後會記錄並結束，
不會回傳給送出指令的一方。
"""

from typing import Optional


class PlayerError(Exception):
    """音訊播放器錯誤基類"""

    def __init__(self, message: str, user_message: Optional[str] = None):
        self.message = message
        self.user_message = user_message or message
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class InvalidTransitionError(PlayerError):
    """
    不合法的狀態轉換（例如已在播放時再次 Play）

    代表上游邏輯錯誤，而非可恢復的執行期狀況
    """

    def __init__(self, command: str, state: str):
        self.command = command
        self.state = state
        super().__init__(
            message=f"Cannot {command} while stream is {state}",
            user_message="播放器狀態錯誤"
        )


class UnknownStreamStateError(PlayerError):
    """串流引擎回報了未知的狀態"""

    def __init__(self, native_state: object):
        self.native_state = native_state
        super().__init__(
            message=f"Stream has entered an unknown state: {native_state!r}",
            user_message="播放引擎進入未知狀態"
        )


class StreamError(PlayerError):
    """串流引擎拒絕操作或無法啟動"""

    def __init__(self, message: str, uri: Optional[str] = None):
        self.uri = uri
        super().__init__(
            message=message,
            user_message="播放時發生錯誤"
        )


class AudioSubsystemError(PlayerError):
    """音訊子系統初始化失敗（找不到 ffplay）"""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            user_message="無法初始化音訊系統"
        )


class TrackFormatError(PlayerError):
    """無法從原始資料建立曲目"""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(
            message=message,
            user_message="曲目資料格式錯誤"
        )
