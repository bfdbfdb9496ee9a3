"""
Text rendering of normalized records.

Pure functions: no I/O, no exceptions for well-formed records.
"""

from typing import Iterable

from qqmusic_lookup.music.models import ChartEntry, LyricsText, SearchResult


HEADER_RULE = "======================"
ENTRY_RULE = "----------------------"


def format_rank_data(entries: Iterable[ChartEntry], title: str) -> str:
    """
    Render a chart as numbered blocks.

    Example output:
        🎵 QQ音乐热歌榜 Top 20:
        ======================
        1. 晴天
           歌手: 周杰伦
           专辑: 叶惠美
           时长: 4:29
        ----------------------
    """
    lines = [f"🎵 QQ音乐{title} Top 20:", HEADER_RULE]
    for entry in entries:
        lines.extend([
            f"{entry.rank}. {entry.name}",
            f"   歌手: {entry.singer}",
            f"   专辑: {entry.album_name}",
            f"   时长: {entry.duration}",
            ENTRY_RULE,
        ])
    return "\n".join(lines) + "\n"


def format_search_data(results: Iterable[SearchResult], keyword: str) -> str:
    """Render search hits as numbered blocks (no duration line)."""
    lines = [f'🔍 搜索结果: "{keyword}"', HEADER_RULE]
    for result in results:
        lines.extend([
            f"{result.rank}. {result.name}",
            f"   歌手: {result.singer}",
            f"   专辑: {result.album_name}",
            ENTRY_RULE,
        ])
    return "\n".join(lines) + "\n"


def format_lyrics_data(lyrics: LyricsText) -> str:
    """Render a lyric between header rules, body verbatim."""
    return (
        f"🎵 {lyrics.song_name} - {lyrics.singer} 的歌词:\n"
        f"{HEADER_RULE}\n"
        f"{lyrics.text}\n"
        f"{HEADER_RULE}\n"
    )
