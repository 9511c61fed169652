"""
ffplay 串流引擎

以 ffplay 子行程實作 Streamable：
- start: 啟動行程（暫停中且來源相同則恢復）
- pause: SIGSTOP 暫停行程，保留位置
- stop: 結束行程，位置回到開頭
- 行程自然結束時送出 StreamEvent.COMPLETED

注意：暫停依賴 SIGSTOP/SIGCONT，只支援 POSIX 系統
"""

import asyncio
import signal
import subprocess
import threading
from typing import Optional, Sequence
from urllib.parse import urlparse
from urllib.request import url2pathname
from loguru import logger

from ..constants import FFPLAY_ARGS, STATE_QUERY_TIMEOUT, STREAM_STOP_TIMEOUT
from ..core.state import StreamEvent, StreamState
from ..utils.errors import StreamError


class FFplayStreamer:
    """
    ffplay 串流引擎

    使用方式：
        streamer = FFplayStreamer(ffplay_path)
        events = streamer.event_listener()   # 必須在事件循環中呼叫

        streamer.queue("file:///music/a.mp3")
        streamer.start()
        streamer.state()   # StreamState.PLAYING
    """

    def __init__(self, ffplay_path: str, args: Sequence[str] = FFPLAY_ARGS):
        """
        初始化串流引擎

        Args:
            ffplay_path: ffplay 執行檔路徑
            args: 傳給 ffplay 的額外參數
        """
        self.ffplay_path = ffplay_path
        self._args = tuple(args)

        self._uri: Optional[str] = None          # 下一次 start() 的來源
        self._playing_uri: Optional[str] = None  # 目前行程播放中的來源
        self._process: Optional[subprocess.Popen] = None
        self._terminating: Optional[subprocess.Popen] = None
        self._paused = False

        # 行程監看執行緒與指令迴圈共用
        self._lock = threading.Lock()

        # 事件接收端（只有一個）
        self._events: Optional[asyncio.Queue] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    # === Streamable ===

    def queue(self, uri: str) -> None:
        self._uri = uri

    def start(self) -> None:
        if self._uri is None:
            raise StreamError("No source queued")

        self._settle(STATE_QUERY_TIMEOUT)

        process = self._process
        if process is not None and process.poll() is None:
            if self._paused and self._uri == self._playing_uri:
                self._signal(process, signal.SIGCONT)
                self._paused = False
                logger.debug(f"已恢復: {self._uri}")
                return
            # 換來源：先結束舊行程
            self._terminate_current()
            self._settle(STATE_QUERY_TIMEOUT)

        self._spawn(self._uri)

    def stop(self) -> None:
        self._terminate_current()

    def pause(self) -> None:
        process = self._process
        if process is None or process.poll() is not None or self._paused:
            return
        self._signal(process, signal.SIGSTOP)
        self._paused = True
        logger.debug(f"已暫停: {self._playing_uri}")

    def state(self, timeout: Optional[float] = STATE_QUERY_TIMEOUT) -> StreamState:
        self._settle(timeout)
        return StreamState.from_native(self._native_state())

    def event_listener(self) -> "asyncio.Queue[StreamEvent]":
        self._loop = asyncio.get_running_loop()
        self._events = asyncio.Queue()
        return self._events

    # === 清理 ===

    def shutdown(self) -> None:
        """結束行程並等待（程式結束時呼叫）"""
        self._terminate_current()
        self._settle(STREAM_STOP_TIMEOUT)
        logger.debug("FFplayStreamer 已關閉")

    # === 內部方法 ===

    def _native_state(self) -> str:
        process = self._process
        if process is None:
            return "null"
        if process.poll() is not None:
            return "ready"
        if self._paused:
            return "paused"
        return "playing"

    def _spawn(self, uri: str) -> None:
        command = [self.ffplay_path, *self._args, _source_for(uri)]
        try:
            process = subprocess.Popen(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            raise StreamError(f"Failed to start ffplay: {e}", uri=uri) from e

        with self._lock:
            self._process = process
            self._playing_uri = uri
            self._paused = False

        threading.Thread(
            target=self._watch,
            args=(process,),
            name="ffplay-watcher",
            daemon=True,
        ).start()

        logger.debug(f"ffplay 已啟動 (pid={process.pid}): {uri}")

    def _terminate_current(self) -> None:
        """結束目前行程，留到 _settle 回收"""
        with self._lock:
            process = self._process
            self._process = None
            self._playing_uri = None
            paused = self._paused
            self._paused = False

        if process is None or process.poll() is not None:
            return

        process.terminate()
        if paused:
            # 被 SIGSTOP 的行程要先恢復才會處理 SIGTERM
            self._signal(process, signal.SIGCONT)
        self._terminating = process

    def _settle(self, timeout: Optional[float]) -> None:
        """等待正在結束的行程，逾時則強制 kill"""
        process = self._terminating
        if process is None:
            return

        try:
            process.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            logger.warning(f"ffplay 未在 {timeout}s 內結束，強制終止 (pid={process.pid})")
            process.kill()
            process.wait()

        self._terminating = None

    def _signal(self, process: subprocess.Popen, sig: int) -> None:
        try:
            process.send_signal(sig)
        except OSError as e:
            raise StreamError(f"ffplay rejected signal {sig}: {e}", uri=self._playing_uri) from e

    def _watch(self, process: subprocess.Popen) -> None:
        """
        等待行程結束（在監看執行緒中執行）

        只有目前的行程自然結束才算播完；被 stop 或換來源的不送事件
        """
        returncode = process.wait()

        with self._lock:
            natural = process is self._process

        if not natural:
            return

        if returncode != 0:
            logger.warning(f"ffplay 異常結束 (code={returncode})")

        if self._loop is None or self._events is None or self._loop.is_closed():
            return

        self._loop.call_soon_threadsafe(self._events.put_nowait, StreamEvent.COMPLETED)


def _source_for(uri: str) -> str:
    """file:// URI 轉成本地路徑，其他 URI 原樣交給 ffplay"""
    parsed = urlparse(uri)
    if parsed.scheme == "file":
        return url2pathname(parsed.path)
    return uri
