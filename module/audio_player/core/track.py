"""
曲目資料結構

播放核心只會讀取 file（可播放的 URI），
其他欄位由外部的曲庫/標籤解析填入。
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from ..utils.errors import TrackFormatError

_U64_MAX = 2 ** 64 - 1
_U8_MAX = 255


@dataclass(frozen=True)
class Track:
    """
    曲目（不可變）

    相等性以所有欄位比較
    """
    id: int                          # 曲庫中的編號（u64 範圍）
    track: int                       # 專輯內的曲序（0-255）
    title: str                       # 標題
    artist: str                      # 演出者
    album: str                       # 專輯
    file: str                        # 可播放的 URI

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Track":
        """
        從反序列化的資料建立曲目

        Args:
            raw: 包含 id/track/title/artist/album/file 的 mapping

        Returns:
            Track

        Raises:
            TrackFormatError: 缺少欄位或數值超出範圍
        """
        try:
            track_id = raw["id"]
            number = raw["track"]
            title = raw["title"]
            artist = raw["artist"]
            album = raw["album"]
            file = raw["file"]
        except KeyError as e:
            raise TrackFormatError(f"Missing track field: {e.args[0]}", field=e.args[0]) from None

        for name, value, upper in (("id", track_id, _U64_MAX), ("track", number, _U8_MAX)):
            # bool 是 int 的子類別，要排除
            if not isinstance(value, int) or isinstance(value, bool):
                raise TrackFormatError(f"Field {name} must be an integer, got {value!r}", field=name)
            if not 0 <= value <= upper:
                raise TrackFormatError(f"Field {name} out of range: {value}", field=name)

        for name, value in (("title", title), ("artist", artist), ("album", album), ("file", file)):
            if not isinstance(value, str):
                raise TrackFormatError(f"Field {name} must be a string, got {value!r}", field=name)

        if not file:
            raise TrackFormatError("Field file must not be empty", field="file")

        return cls(id=track_id, track=number, title=title, artist=artist, album=album, file=file)

    @classmethod
    def from_path(cls, path: str, id: int = 0, track: int = 0) -> "Track":
        """
        為本地檔案建立曲目，標題取自檔名

        Args:
            path: 本地檔案路徑
            id: 曲目編號
            track: 曲序
        """
        resolved = Path(path).expanduser().resolve()
        return cls(
            id=id,
            track=track,
            title=resolved.stem,
            artist="",
            album="",
            file=resolved.as_uri(),
        )

    def __str__(self) -> str:
        if self.artist:
            return f"{self.artist} - {self.title}"
        return self.title
