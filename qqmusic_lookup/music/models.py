"""
Data models for QQ Music entities.

Two kinds of models live here:

Raw response records (RawSong, ChartPayload, SearchPayload, LyricsPayload):
    Typed, all-optional views of the upstream JSON. Each has a
    ``from_api`` factory that validates the container structure once and
    raises FormatError when a required container is missing. Leaf fields
    are never required; absent values become None.

Normalized records (ChartEntry, SearchResult, LyricsText):
    What formatters consume. Every string field is non-null; missing
    upstream data is replaced by a fixed placeholder.

Design Decisions:
    - All dataclasses are frozen (immutable)
    - Records are built per request and never cached
    - ``rank`` is always assigned from output position, never read from
      the upstream payload
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any

from qqmusic_lookup.core.exceptions import FormatError
from qqmusic_lookup.utils import format_duration, join_singers


UNKNOWN_SONG = "未知歌曲"
UNKNOWN_ALBUM = "未知专辑"
UNKNOWN_DURATION = "未知时长"


class ChartType(Enum):
    """
    Known QQ Music charts.

    Each member carries the CLI/API key, the upstream ``topid`` and the
    display title.
    """

    HOT = ("hot", 26, "热歌榜")
    NEW = ("new", 27, "新歌榜")
    NETWORK = ("network", 28, "网络歌曲榜")
    MAINLAND = ("mainland", 5, "内地榜")
    WESTERN = ("western", 3, "欧美榜")
    KOREA = ("korea", 16, "韩国榜")
    JAPAN = ("japan", 17, "日本榜")

    def __init__(self, key: str, top_id: int, title: str) -> None:
        self.key = key
        self.top_id = top_id
        self.title = title

    @classmethod
    def from_key(cls, key: str | None) -> "ChartType":
        """
        Resolve a chart key case-insensitively.

        Unknown or empty keys fall back to the hot chart.

        Example:
            ChartType.from_key("JAPAN").top_id   # 17
            ChartType.from_key("unknown").title  # "热歌榜"
        """
        normalized = (key or "").strip().lower()
        for chart in cls:
            if chart.key == normalized:
                return chart
        return cls.HOT

    @classmethod
    def keys(cls) -> list[str]:
        return [chart.key for chart in cls]


def _as_text(value: Any) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


def _as_seconds(value: Any) -> int | None:
    # bool is an int subclass and never a duration
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str) and value.strip().isdecimal():
        return int(value.strip())
    return None


@dataclass(frozen=True)
class RawSong:
    """
    One song object as returned by the chart and search endpoints.

    Attributes:
        songname: Song title, or None.
        singer: The raw performer list (normally a list of {"name": ...}).
                Kept raw; join_singers() applies the placeholder rules.
        albumname: Album title, or None.
        interval: Duration in seconds, or None.
        songmid: Song identifier used by the lyrics endpoint, or None.
    """
    songname: str | None = None
    singer: Any = None
    albumname: str | None = None
    interval: int | None = None
    songmid: str | None = None

    @classmethod
    def from_api(cls, data: Any) -> "RawSong":
        """Build from a song dict; non-dict input yields an all-None record."""
        if not isinstance(data, dict):
            return cls()
        return cls(
            songname=_as_text(data.get("songname")),
            singer=data.get("singer"),
            albumname=_as_text(data.get("albumname")),
            interval=_as_seconds(data.get("interval")),
            songmid=_as_text(data.get("songmid")),
        )


@dataclass(frozen=True)
class ChartPayload:
    """
    Body of the toplist endpoint.

    Attributes:
        songs: One entry per upstream ``songlist`` item, in order. Items
               without a nested ``data`` dict are kept as None so that
               slicing happens on upstream positions.
    """
    songs: tuple[RawSong | None, ...]

    @classmethod
    def from_api(cls, body: Any) -> "ChartPayload":
        """
        Validate and destructure a toplist response.

        Raises:
            FormatError: If ``songlist`` is missing or not a list.
        """
        songlist = body.get("songlist") if isinstance(body, dict) else None
        if songlist is None:
            raise FormatError(
                "获取排行榜数据格式错误",
                details={"field": "songlist", "type": type(body).__name__}
            )

        if not isinstance(songlist, list):
            raise FormatError(
                "排行榜数据格式错误",
                details={"field": "songlist", "type": type(songlist).__name__}
            )

        songs = []
        for item in songlist:
            data = item.get("data") if isinstance(item, dict) else None
            songs.append(RawSong.from_api(data) if isinstance(data, dict) else None)
        return cls(songs=tuple(songs))


@dataclass(frozen=True)
class SearchPayload:
    """
    Body of the search endpoint (``data.song.list``).

    Attributes:
        songs: Songs in response order.
    """
    songs: tuple[RawSong, ...]

    @classmethod
    def from_api(cls, body: Any) -> "SearchPayload":
        """
        Validate and destructure a search response.

        Raises:
            FormatError: If any link of data -> song -> list is missing.
        """
        data = body.get("data") if isinstance(body, dict) else None
        song = data.get("song") if isinstance(data, dict) else None
        song_list = song.get("list") if isinstance(song, dict) else None

        if not isinstance(song_list, list):
            raise FormatError(
                "搜索结果格式错误",
                details={"path": "data.song.list"}
            )

        return cls(songs=tuple(RawSong.from_api(item) for item in song_list))


@dataclass(frozen=True)
class LyricsPayload:
    """
    Body of the lyric endpoint.

    Attributes:
        lyric: Base64-encoded lyric text, or None when absent or empty.
    """
    lyric: str | None = None

    @classmethod
    def from_api(cls, body: Any) -> "LyricsPayload":
        """
        Raises:
            FormatError: If the body is not a JSON object.
        """
        if not isinstance(body, dict):
            raise FormatError(
                "歌词数据格式错误",
                details={"type": type(body).__name__}
            )
        return cls(lyric=_as_text(body.get("lyric")))


@dataclass(frozen=True)
class ChartEntry:
    """
    One ranked song of a chart.

    Attributes:
        rank: 1-based output position.
        name: Song title or "未知歌曲".
        singer: Performers joined with "/" or "未知歌手".
        album_name: Album title or "未知专辑".
        duration: "M:SS" or "未知时长".
    """
    rank: int
    name: str
    singer: str
    album_name: str
    duration: str

    @classmethod
    def from_raw(cls, rank: int, song: RawSong) -> "ChartEntry":
        return cls(
            rank=rank,
            name=song.songname or UNKNOWN_SONG,
            singer=join_singers(song.singer),
            album_name=song.albumname or UNKNOWN_ALBUM,
            duration=format_duration(song.interval) if song.interval else UNKNOWN_DURATION,
        )


@dataclass(frozen=True)
class SearchResult:
    """
    One search hit.

    Attributes:
        rank: 1-based output position.
        name: Song title or "未知歌曲".
        singer: Performers joined with "/" or "未知歌手".
        album_name: Album title or "未知专辑".
        songmid: Identifier for the lyrics endpoint ("" when missing).
                 Not displayed.
    """
    rank: int
    name: str
    singer: str
    album_name: str
    songmid: str = ""

    @classmethod
    def from_raw(cls, rank: int, song: RawSong) -> "SearchResult":
        return cls(
            rank=rank,
            name=song.songname or UNKNOWN_SONG,
            singer=join_singers(song.singer),
            album_name=song.albumname or UNKNOWN_ALBUM,
            songmid=song.songmid or "",
        )


@dataclass(frozen=True)
class LyricsText:
    """
    Decoded lyric of a song.

    Attributes:
        text: Lyric body exactly as decoded (newlines preserved).
        song_name: Caller-supplied song name.
        singer: Caller-supplied singer.
    """
    text: str
    song_name: str
    singer: str
