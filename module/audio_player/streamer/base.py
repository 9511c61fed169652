"""
串流引擎介面

播放器只依賴這個介面，實際的解碼與輸出交給實作（例如 FFplayStreamer）
"""

import asyncio
from typing import Optional, Protocol

from ..core.state import StreamEvent, StreamState


class Streamable(Protocol):
    """可以從 URI 串流任何資料的引擎"""

    def queue(self, uri: str) -> None:
        """設定下一次 start() 要播放的來源"""
        ...

    def start(self) -> None:
        """開始播放"""
        ...

    def stop(self) -> None:
        """停止播放，位置回到開頭"""
        ...

    def pause(self) -> None:
        """暫停播放，保留目前位置"""
        ...

    def state(self, timeout: Optional[float] = None) -> StreamState:
        """
        回傳引擎目前的狀態

        可能需要等待引擎進入穩定狀態，timeout 為等待上限（秒）
        """
        ...

    def event_listener(self) -> "asyncio.Queue[StreamEvent]":
        """回傳接收串流事件的佇列（只預期一個接收者）"""
        ...
