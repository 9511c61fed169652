"""
音訊播放器核心

整合所有播放相關功能：
- 播放控制（播放、暫停、停止、上/下一首）
- 指令通道（多個送出端，單一消費者，依序套用）
- 佇列管理（使用 PlayQueue）
- 狀態查詢（每次即時詢問串流引擎）
"""

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, TYPE_CHECKING
from loguru import logger

from ..constants import COMMAND_TICK_INTERVAL
from ..utils.decorators import handle_errors, log_operation
from ..utils.errors import InvalidTransitionError
from .queue import PlayQueue
from .state import StreamEvent, StreamState
from .track import Track

if TYPE_CHECKING:
    from ..streamer.base import Streamable


class CommandKind(Enum):
    """播放器指令種類"""

    QUEUE = "queue"          # 加入佇列
    PLAY = "play"            # 開始播放
    PAUSE = "pause"          # 暫停，保留位置
    STOP = "stop"            # 停止，位置回到開頭
    NEXT = "next"            # 下一首
    PREVIOUS = "previous"    # 上一首
    KILL = "kill"            # 結束指令迴圈


@dataclass(frozen=True)
class PlayerCommand:
    """送給播放器的指令"""

    kind: CommandKind
    track: Optional[Track] = None

    @classmethod
    def queue(cls, track: Track) -> "PlayerCommand":
        return cls(CommandKind.QUEUE, track)

    @classmethod
    def play(cls) -> "PlayerCommand":
        return cls(CommandKind.PLAY)

    @classmethod
    def pause(cls) -> "PlayerCommand":
        return cls(CommandKind.PAUSE)

    @classmethod
    def stop(cls) -> "PlayerCommand":
        return cls(CommandKind.STOP)

    @classmethod
    def next(cls) -> "PlayerCommand":
        return cls(CommandKind.NEXT)

    @classmethod
    def previous(cls) -> "PlayerCommand":
        return cls(CommandKind.PREVIOUS)

    @classmethod
    def kill(cls) -> "PlayerCommand":
        return cls(CommandKind.KILL)

    def __str__(self) -> str:
        if self.track is not None:
            return f"{self.kind.value}({self.track})"
        return self.kind.value


class PlayerSender:
    """
    指令送出端

    只能送指令，不會回傳結果，也無法直接存取佇列或引擎。
    可以有任意多個持有者。
    """

    def __init__(self, commands: "asyncio.Queue[PlayerCommand]", loop: asyncio.AbstractEventLoop):
        self._commands = commands
        self._loop = loop

    def send(self, command: PlayerCommand) -> None:
        """送出指令（必須在事件循環所在的執行緒呼叫）"""
        self._commands.put_nowait(command)

    def send_threadsafe(self, command: PlayerCommand) -> None:
        """從其他執行緒送出指令"""
        self._loop.call_soon_threadsafe(self._commands.put_nowait, command)

    @property
    def pending(self) -> int:
        """尚未被套用的指令數量"""
        return self._commands.qsize()


class Player:
    """
    音訊播放器核心類別

    播放器是佇列游標唯一的修改者；傳輸狀態不在這裡保存，
    每次都從串流引擎即時查詢。

    使用方式：
        player = Player(streamer)
        sender = player.event_listener()   # 必須在事件循環中呼叫

        sender.send(PlayerCommand.queue(track))
        sender.send(PlayerCommand.play())
        ...
        sender.send(PlayerCommand.kill())
        await player.wait_closed()
    """

    def __init__(self, streamer: "Streamable", is_looping: bool = False):
        """
        初始化播放器（佇列為空）

        Args:
            streamer: 串流引擎
            is_looping: 播完最後一首時是否從第一首重新開始
        """
        self.is_looping = is_looping
        self._play_queue: PlayQueue[Track] = PlayQueue()
        self._streamer = streamer
        self._task: Optional[asyncio.Task] = None

    # === 指令通道 ===

    def event_listener(self) -> PlayerSender:
        """
        建立指令迴圈，回傳送出端

        迴圈每個 tick 取出一個指令並套用，直到收到 KILL
        """
        loop = asyncio.get_running_loop()
        commands: "asyncio.Queue[PlayerCommand]" = asyncio.Queue()
        self._task = loop.create_task(self._run_commands(commands), name="player-commands")
        return PlayerSender(commands, loop)

    @property
    def is_running(self) -> bool:
        """指令迴圈是否仍在執行"""
        return self._task is not None and not self._task.done()

    async def wait_closed(self) -> None:
        """
        等待指令迴圈結束

        迴圈因致命錯誤結束時，錯誤會在這裡重新拋出
        """
        if self._task is not None:
            await self._task

    @handle_errors
    async def _run_commands(self, commands: "asyncio.Queue[PlayerCommand]") -> None:
        should_continue = True
        while should_continue:
            command = await commands.get()
            logger.trace(f"執行播放器指令: {command}")
            should_continue = self.apply(command)
            await asyncio.sleep(COMMAND_TICK_INTERVAL)

        logger.debug(f"指令迴圈已結束，剩餘 {commands.qsize()} 個指令未執行")

    def apply(self, command: PlayerCommand) -> bool:
        """
        套用單一指令

        Returns:
            指令迴圈是否應繼續執行（KILL 時為 False）
        """
        match command.kind:
            case CommandKind.QUEUE:
                self.queue(command.track)
            case CommandKind.PLAY:
                self.play()
            case CommandKind.PAUSE:
                self.pause()
            case CommandKind.STOP:
                self.stop()
            case CommandKind.NEXT:
                self.next_track()
            case CommandKind.PREVIOUS:
                self.previous_track()
            case CommandKind.KILL:
                return False
        return True

    # === 狀態查詢 ===

    def state(self) -> StreamState:
        """
        串流引擎目前的狀態

        警告：可能會等待引擎進入穩定狀態而阻塞
        """
        return self._streamer.state()

    def is_playing(self) -> bool:
        """是否正在播放"""
        return self.state() == StreamState.PLAYING

    def current_track(self) -> Optional[Track]:
        """佇列中的當前曲目（不一定正在播放）"""
        return self._play_queue.current()

    def has_next(self) -> bool:
        """佇列中是否還有下一首"""
        return self._play_queue.has_next()

    def get_status(self) -> dict:
        """取得播放器完整狀態"""
        return {
            "state": self.state(),
            "is_looping": self.is_looping,
            "current_track": self.current_track(),
            "queue_size": len(self._play_queue),
            "current_index": self._play_queue.current_index,
            "is_running": self.is_running,
        }

    # === 播放控制 ===

    @log_operation("加入佇列")
    def queue(self, track: Track) -> None:
        """新增曲目到佇列尾端"""
        self._play_queue.append(track)

    @log_operation("播放")
    def play(self) -> None:
        """
        播放當前曲目，佇列為空時不做任何事

        Raises:
            InvalidTransitionError: 已經在播放中
        """
        state = self.state()
        if state == StreamState.PLAYING:
            raise InvalidTransitionError("play", state.value)

        track = self.current_track()
        if track is None:
            logger.debug("佇列為空，無法播放")
            return

        self._streamer.queue(track.file)
        self._streamer.start()
        logger.info(f"開始播放: {track}")

    @log_operation("暫停")
    def pause(self) -> None:
        """
        暫停播放，保留目前位置

        Raises:
            InvalidTransitionError: 已經暫停
        """
        state = self.state()
        if state == StreamState.PAUSED:
            raise InvalidTransitionError("pause", state.value)
        self._streamer.pause()

    @log_operation("停止")
    def stop(self) -> None:
        """停止播放，沒有在播放時不做任何事"""
        if self.is_playing():
            self._streamer.stop()

    @log_operation("下一首")
    def next_track(self) -> None:
        """
        停止當前曲目並播放下一首

        沒有下一首時：循環模式從第一首重新開始，否則保持停止
        """
        self._halt()

        if self._play_queue.next() is None:
            if self.is_looping:
                self._play_queue.reset()
            else:
                logger.info("播放清單已結束")
                return

        self.play()

    @log_operation("上一首")
    def previous_track(self) -> None:
        """
        停止當前曲目並播放上一首

        已在第一首時從頭重播
        """
        self._halt()
        self._play_queue.previous()
        self.play()

    # === 內部方法 ===

    def _halt(self) -> None:
        """換曲前停止引擎（暫停中也要停止，才會從頭開始）"""
        if self.state() != StreamState.STOPPED:
            self._streamer.stop()


async def bridge_completion(
    events: "asyncio.Queue[StreamEvent]",
    sender: PlayerSender,
    is_last: Optional[Callable[[], bool]] = None,
) -> None:
    """
    將串流引擎的播完事件轉成 NEXT 指令

    播放器本身不會自動換曲，需要由外部啟動這個協程。

    Args:
        events: 串流引擎的事件佇列
        sender: 播放器指令送出端
        is_last: 回傳 True 時改送 KILL（播完最後一首就結束）
    """
    while True:
        event = await events.get()
        if event is not StreamEvent.COMPLETED:
            continue

        if is_last is not None and is_last():
            logger.debug("最後一首已播完，結束播放器")
            sender.send(PlayerCommand.kill())
            return

        sender.send(PlayerCommand.next())
