from loguru import logger
from dotenv import load_dotenv

import argparse
import asyncio
import os
import sys

from module.audio_player import (
    FFplayStreamer,
    Player,
    PlayerCommand,
    PlayerError,
    Track,
    bridge_completion,
    init_audio_subsystem,
)

version = "v1.0"

# ─────────────────────────────────────────────────────────
#  設定讀取
# ─────────────────────────────────────────────────────────

def env_flag(name: str) -> bool:
    return os.getenv(name, '').lower() in ('true', '1', 'yes')


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="依序播放音訊檔案")
    parser.add_argument("files", nargs="+", help="要播放的檔案")
    parser.add_argument("--loop", action="store_true", default=None, help="播完後從第一首重新開始")
    parser.add_argument("--version", action="version", version=version)
    return parser.parse_args(argv)

# ─────────────────────────────────────────────────────────
#  播放流程
# ─────────────────────────────────────────────────────────

async def run(files, is_looping: bool) -> None:
    ffplay_path = await init_audio_subsystem(
        path=os.getenv("FFPLAY_PATH") or None,
        cache_dir=os.getenv("FFPLAY_CACHE_DIR") or None,
    )

    streamer = FFplayStreamer(ffplay_path)
    events = streamer.event_listener()

    player = Player(streamer, is_looping=is_looping)
    sender = player.event_listener()

    for index, path in enumerate(files, start=1):
        sender.send(PlayerCommand.queue(Track.from_path(path, id=index, track=index)))
    sender.send(PlayerCommand.play())

    bridge = asyncio.create_task(
        bridge_completion(
            events,
            sender,
            is_last=lambda: not player.is_looping and not player.has_next(),
        )
    )

    try:
        await player.wait_closed()
    finally:
        bridge.cancel()
        streamer.shutdown()

    logger.info("播放結束")

# ─────────────────────────────────────────────────────────
#  Loguru 記錄器設定
# ─────────────────────────────────────────────────────────

def set_logger():
    """設定 Loguru 的輸出行為（終端機 & 檔案）"""
    logger.remove()
    debug_mode = env_flag('DEBUG')

    # 終端輸出
    logger.add(sys.stdout, level="DEBUG" if debug_mode else "INFO", colorize=True)

    # 檔案輸出（每 7 天輪替，保留 30 天，自動壓縮）
    logger.add(
        "./logs/system.log",
        rotation="7 days",
        retention="30 days",
        encoding="UTF-8",
        compression="zip",
        level="INFO",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}"
    )

# ─────────────────────────────────────────────────────────
#  程式入口點
# ─────────────────────────────────────────────────────────

def main(argv=None) -> int:
    load_dotenv()
    set_logger()

    args = parse_args(argv)
    is_looping = args.loop if args.loop is not None else env_flag("PLAYER_LOOP")

    try:
        asyncio.run(run(args.files, is_looping))
    except PlayerError as e:
        logger.critical(f"❗ 播放器已終止：{e.user_message}（{e.message}）")
        return 1
    except KeyboardInterrupt:
        logger.info("已中斷")
    return 0


if __name__ == '__main__':
    sys.exit(main())
