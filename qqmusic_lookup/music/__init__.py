"""
QQ Music endpoint adapters, records and formatters.

Components:
    - charts: fetch_chart (toplist endpoint)
    - search: search_songs (search endpoint)
    - lyrics: fetch_lyrics, decode_lyric (search + lyric endpoints)
    - models: ChartType, raw response records, normalized records
    - formatter: format_rank_data, format_search_data, format_lyrics_data

Usage:
    from qqmusic_lookup.music import ChartType, fetch_chart, format_rank_data

    chart = ChartType.from_key("japan")
    entries = await fetch_chart(chart.top_id)
    print(format_rank_data(entries, chart.title))
"""

from qqmusic_lookup.music.charts import CHART_LIMIT, fetch_chart
from qqmusic_lookup.music.formatter import (
    format_lyrics_data,
    format_rank_data,
    format_search_data,
)
from qqmusic_lookup.music.lyrics import decode_lyric, fetch_lyrics
from qqmusic_lookup.music.models import (
    ChartEntry,
    ChartPayload,
    ChartType,
    LyricsPayload,
    LyricsText,
    RawSong,
    SearchPayload,
    SearchResult,
)
from qqmusic_lookup.music.search import SEARCH_PAGE_SIZE, search_songs

__all__ = [
    # Adapters
    "fetch_chart",
    "search_songs",
    "fetch_lyrics",
    "decode_lyric",
    "CHART_LIMIT",
    "SEARCH_PAGE_SIZE",
    # Records
    "ChartType",
    "ChartEntry",
    "SearchResult",
    "LyricsText",
    "RawSong",
    "ChartPayload",
    "SearchPayload",
    "LyricsPayload",
    # Formatters
    "format_rank_data",
    "format_search_data",
    "format_lyrics_data",
]
