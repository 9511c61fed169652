"""
播放佇列

特性：
- 保留加入順序，單一游標
- 不循環：到頭/到尾就停在邊界
- 上一首在第一首時會回傳同一首（從頭重播）
- 單一擁有者，不需要鎖
"""

from typing import Generic, Iterator, List, Optional, TypeVar
from loguru import logger

T = TypeVar("T")


class PlayQueue(Generic[T]):
    """
    播放佇列

    游標只在佇列為空時未定義；第一次加入項目時游標指向第一個，
    之後的加入都不會移動游標。

    使用方式：
        queue = PlayQueue()
        queue.append(track)

        queue.next()      # 下一首
        queue.previous()  # 上一首
        queue.reset()     # 回到第一首
    """

    def __init__(self):
        self._items: List[T] = []
        self._current_index: Optional[int] = None

    # === 屬性 ===

    @property
    def is_empty(self) -> bool:
        """佇列是否為空"""
        return len(self._items) == 0

    @property
    def current_index(self) -> Optional[int]:
        """當前游標（0-based），佇列為空時為 None"""
        return self._current_index

    @property
    def all_items(self) -> List[T]:
        """取得所有項目（只讀）"""
        return self._items.copy()

    # === 新增 ===

    def append(self, item: T) -> None:
        """新增項目到佇列尾端"""
        self._items.append(item)

        # 如果是第一個，設定游標
        if self._current_index is None:
            self._current_index = 0

        logger.debug(f"已加入佇列: {item}，目前共 {len(self._items)} 首")

    # === 導航操作 ===

    def current(self) -> Optional[T]:
        """當前游標指向的項目"""
        if self._current_index is None:
            return None
        return self._items[self._current_index]

    def next(self) -> Optional[T]:
        """
        移到下一個

        Returns:
            新的當前項目；已在最後一個時返回 None，游標不動
        """
        if self._current_index is None:
            return None

        if self._current_index + 1 >= len(self._items):
            return None

        self._current_index += 1
        return self.current()

    def previous(self) -> Optional[T]:
        """
        移到上一個

        已在第一個時游標不動，返回同一個項目（從頭重播）

        Returns:
            新的當前項目；佇列為空時返回 None
        """
        if self._current_index is None:
            return None

        if self._current_index > 0:
            self._current_index -= 1
        return self.current()

    def reset(self) -> None:
        """游標回到第一個"""
        if self._current_index is not None:
            self._current_index = 0

    # === 查詢操作 ===

    def has_next(self) -> bool:
        """游標之後是否還有項目"""
        if self._current_index is None:
            return False
        return self._current_index + 1 < len(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)
