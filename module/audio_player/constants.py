"""
音訊播放器常數設定

集中管理所有可調整的參數
"""

from pathlib import Path

# ─────────────────────────────────────────────────────────
#  串流引擎（ffplay）
# ─────────────────────────────────────────────────────────

# 查詢串流狀態時，等待正在結束的行程的最長秒數（None 表示無限等待）
STATE_QUERY_TIMEOUT = 1.0

# 停止串流時，等待行程結束的秒數，逾時則強制 kill
STREAM_STOP_TIMEOUT = 3.0

# ffplay 啟動參數（不開視窗、播完自動結束、安靜模式）
FFPLAY_ARGS = ("-nodisp", "-autoexit", "-loglevel", "quiet")

# ─────────────────────────────────────────────────────────
#  ffplay 取得
# ─────────────────────────────────────────────────────────

# 下載的 ffplay 快取位置
FFPLAY_CACHE_DIR = Path(__file__).parent / "streamer" / "bin"

# 下載逾時（秒）
FFPLAY_DOWNLOAD_TIMEOUT = 300

# 下載重試次數
FFPLAY_DOWNLOAD_RETRIES = 3

# ─────────────────────────────────────────────────────────
#  指令迴圈
# ─────────────────────────────────────────────────────────

# 每個 tick 之間讓出事件循環的秒數
COMMAND_TICK_INTERVAL = 0
