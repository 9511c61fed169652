"""
音訊播放器裝飾器

提供自動化功能：
- log_operation: 記錄指令的開始和結束
- handle_errors: 統一錯誤處理
"""

from functools import wraps
from typing import Callable, TypeVar, ParamSpec
from loguru import logger

from .errors import PlayerError

P = ParamSpec('P')
T = TypeVar('T')


def log_operation(operation_name: str = None):
    """
    裝飾器：記錄操作的開始和結束

    使用方式：
        @log_operation("播放")
        def play(self):
            ...
    """
    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        name = operation_name or func.__name__

        @wraps(func)
        def wrapper(*args, **kwargs):
            logger.debug(f"開始: {name}")
            try:
                result = func(*args, **kwargs)
                logger.debug(f"完成: {name}")
                return result
            except Exception as e:
                logger.error(f"失敗: {name} - {e}")
                raise

        return wrapper
    return decorator


def handle_errors(func: Callable[P, T]) -> Callable[P, T]:
    """
    裝飾器：統一處理錯誤並記錄（用於協程）

    任何 PlayerError 都會被記錄後重新拋出，
    其他例外則記錄完整 traceback 後重新拋出。
    """
    @wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except PlayerError as e:
            logger.critical(f"[{func.__name__}] 播放器錯誤: {e.message}")
            raise
        except Exception as e:
            logger.exception(f"[{func.__name__}] 未預期錯誤: {e}")
            raise

    return wrapper
