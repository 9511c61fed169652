"""
ffplay 管理器

優先順序：
1. 明確指定的路徑（FFPLAY_PATH）
2. 系統 PATH 中的 ffplay
3. 本地快取的 ffplay（之前下載過的）
4. 自動下載（從 GitHub BtbN/FFmpeg-Builds，內含 ffplay）
"""

import asyncio
import os
import platform
import shutil
import subprocess
import zipfile
import tarfile
from pathlib import Path
from typing import Optional
from loguru import logger

import aiohttp

from ..constants import FFPLAY_CACHE_DIR, FFPLAY_DOWNLOAD_RETRIES, FFPLAY_DOWNLOAD_TIMEOUT
from ..utils.errors import AudioSubsystemError


class FFplayManager:
    """
    ffplay 管理器

    使用方式：
        manager = FFplayManager()
        path = await manager.ensure_ffplay()
        # path 會是系統 PATH 中的 ffplay 或快取的絕對路徑
    """

    # GitHub BtbN/FFmpeg-Builds 下載 URL（穩定來源）
    DOWNLOAD_URLS = {
        "Windows": "https://github.com/BtbN/FFmpeg-Builds/releases/download/latest/ffmpeg-master-latest-win64-gpl.zip",
        "Linux": "https://github.com/BtbN/FFmpeg-Builds/releases/download/latest/ffmpeg-master-latest-linux64-gpl.tar.xz",
    }

    def __init__(self, cache_dir: str = None, explicit_path: str = None):
        """
        初始化 ffplay 管理器

        Args:
            cache_dir: 快取目錄，預設為 constants.FFPLAY_CACHE_DIR
            explicit_path: 明確指定的 ffplay 路徑
        """
        self.cache_dir = Path(cache_dir) if cache_dir else FFPLAY_CACHE_DIR
        self.explicit_path = explicit_path
        self._ffplay_path: Optional[str] = None

    @property
    def ffplay_name(self) -> str:
        return "ffplay.exe" if platform.system() == "Windows" else "ffplay"

    @property
    def ffplay_path(self) -> Optional[str]:
        """取得 ffplay 路徑（如果已確認）"""
        return self._ffplay_path

    async def ensure_ffplay(self) -> str:
        """
        確保 ffplay 可用，返回可執行路徑

        Raises:
            AudioSubsystemError: 所有來源都無法取得 ffplay
        """
        # 1. 明確指定
        if self.explicit_path:
            if not self._verify(self.explicit_path):
                raise AudioSubsystemError(f"ffplay not usable at {self.explicit_path}")
            logger.info(f"使用指定 ffplay: {self.explicit_path}")
            self._ffplay_path = self.explicit_path
            return self.explicit_path

        # 2. 檢查系統 PATH
        system_ffplay = self._find_in_path()
        if system_ffplay:
            logger.info(f"使用系統 ffplay: {system_ffplay}")
            self._ffplay_path = system_ffplay
            return system_ffplay

        # 3. 檢查本地快取
        cached = self._find_cached()
        if cached:
            logger.info(f"使用快取 ffplay: {cached}")
            self._ffplay_path = str(cached)
            return str(cached)

        # 4. 下載
        logger.info("系統未安裝 ffplay，開始下載...")
        downloaded = await self._download_ffplay()
        if downloaded:
            logger.info(f"ffplay 下載完成: {downloaded}")
            self._ffplay_path = str(downloaded)
            return str(downloaded)

        raise AudioSubsystemError("Unable to locate or download ffplay")

    def _verify(self, path: str) -> bool:
        """執行 -version 確認可執行"""
        try:
            result = subprocess.run(
                [str(path), "-version"],
                capture_output=True,
                text=True,
                timeout=10,
            )
        except (OSError, subprocess.SubprocessError):
            return False
        return "ffplay version" in result.stdout

    def _find_in_path(self) -> Optional[str]:
        """檢查系統 PATH 中是否有 ffplay"""
        ffplay = shutil.which("ffplay")
        if ffplay and self._verify(ffplay):
            return ffplay
        return None

    def _find_cached(self) -> Optional[Path]:
        """檢查本地快取中是否有 ffplay"""
        cached = self.cache_dir / self.ffplay_name
        if cached.exists() and self._verify(str(cached)):
            return cached
        return None

    async def _download_ffplay(self) -> Optional[Path]:
        """從 GitHub 下載 ffplay"""
        system = platform.system()
        if system not in self.DOWNLOAD_URLS:
            logger.error(f"不支援的作業系統: {system}")
            return None

        url = self.DOWNLOAD_URLS[system]
        self.cache_dir.mkdir(parents=True, exist_ok=True)

        if system == "Windows":
            archive_path = self.cache_dir / "ffmpeg.zip"
        else:
            archive_path = self.cache_dir / "ffmpeg.tar.xz"

        # 下載（帶重試）
        for attempt in range(FFPLAY_DOWNLOAD_RETRIES):
            try:
                await self._download_file(url, archive_path)
                break
            except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
                logger.warning(f"下載失敗 (嘗試 {attempt + 1}/{FFPLAY_DOWNLOAD_RETRIES}): {e}")
                if attempt == FFPLAY_DOWNLOAD_RETRIES - 1:
                    return None
                await asyncio.sleep(2)

        # 解壓
        try:
            return await asyncio.to_thread(self._extract_ffplay, archive_path, system)
        except (OSError, zipfile.BadZipFile, tarfile.TarError) as e:
            logger.error(f"解壓失敗: {e}")
            return None
        finally:
            # 清理壓縮檔
            if archive_path.exists():
                archive_path.unlink()

    async def _download_file(self, url: str, dest: Path) -> None:
        """非同步下載檔案"""
        logger.info("正在從 GitHub 下載 FFmpeg 套件（約 80-100MB，請稍候）...")

        timeout = aiohttp.ClientTimeout(total=FFPLAY_DOWNLOAD_TIMEOUT)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(url) as resp:
                resp.raise_for_status()

                total = int(resp.headers.get('Content-Length', 0))
                downloaded = 0
                last_logged_percent = 0

                with open(dest, 'wb') as f:
                    async for chunk in resp.content.iter_chunked(64 * 1024):
                        f.write(chunk)
                        downloaded += len(chunk)

                        # 只在 25%, 50%, 75% 輸出進度
                        if total:
                            percent = int(downloaded / total * 100)
                            if percent >= last_logged_percent + 25:
                                last_logged_percent = (percent // 25) * 25
                                logger.info(f"下載進度: {last_logged_percent}%")

                logger.info(f"下載完成: {downloaded / 1024 / 1024:.1f} MB")

    def _extract_ffplay(self, archive: Path, system: str) -> Optional[Path]:
        """解壓並取出 ffplay"""
        logger.info("正在解壓 FFmpeg 套件...")

        extract_dir = self.cache_dir / "extract_temp"
        extract_dir.mkdir(exist_ok=True)

        try:
            if system == "Windows":
                with zipfile.ZipFile(archive, 'r') as zf:
                    zf.extractall(extract_dir)
            else:
                with tarfile.open(archive, 'r:xz') as tf:
                    tf.extractall(extract_dir, filter="data")

            for root, dirs, files in os.walk(extract_dir):
                if self.ffplay_name in files:
                    src = Path(root) / self.ffplay_name
                    dest = self.cache_dir / self.ffplay_name

                    shutil.move(str(src), str(dest))

                    # Linux 需要設定執行權限
                    if system != "Windows":
                        os.chmod(dest, 0o755)

                    logger.info(f"ffplay 已安裝到: {dest}")
                    return dest

            logger.error("在壓縮檔中找不到 ffplay")
            return None

        finally:
            if extract_dir.exists():
                shutil.rmtree(extract_dir, ignore_errors=True)


async def init_audio_subsystem(path: str = None, cache_dir: str = None) -> str:
    """
    初始化音訊子系統（取得可用的 ffplay）

    使用方式：
        ffplay_path = await init_audio_subsystem()

    Raises:
        AudioSubsystemError: 無法取得 ffplay，訊息為錯誤描述
    """
    manager = FFplayManager(cache_dir=cache_dir, explicit_path=path)
    return await manager.ensure_ffplay()
