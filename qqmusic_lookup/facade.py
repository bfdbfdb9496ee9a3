"""
Public entry points of qqmusic-lookup.

The three ``get_*_data`` coroutines never raise: they return either the
formatted text or "Error: <message>". Python callers that want the
failure as data can use the ``fetch_*`` coroutines, which return a
FetchResult instead.

Usage:
    import asyncio
    from qqmusic_lookup import get_rank_data
    from qqmusic_lookup.core import load_config

    print(asyncio.run(get_rank_data("japan")))

    # Without ``config`` built-in defaults apply; pass load_config() to
    # honour config.yaml and the QQMUSIC_* environment variables.
    print(asyncio.run(get_rank_data("hot", config=load_config())))
"""

from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, TypeVar

from qqmusic_lookup.api.requester import Requester
from qqmusic_lookup.core.config import Config
from qqmusic_lookup.core.exceptions import QQMusicError
from qqmusic_lookup.core.logger import get_logger
from qqmusic_lookup.music.charts import fetch_chart
from qqmusic_lookup.music.formatter import (
    format_lyrics_data,
    format_rank_data,
    format_search_data,
)
from qqmusic_lookup.music.lyrics import fetch_lyrics
from qqmusic_lookup.music.models import ChartEntry, ChartType, LyricsText, SearchResult
from qqmusic_lookup.music.search import search_songs

logger = get_logger(__name__)

T = TypeVar("T")

NO_DATA = "暂无数据"


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """
    Outcome of one lookup: either a value or an error message.

    Attributes:
        value: The normalized records on success.
        error: Human-readable failure message, None on success.
        error_type: Exception class name of the failure, None on success.
    """
    value: T | None = None
    error: str | None = None
    error_type: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def render(self, formatter: Callable[[T], str]) -> str:
        """
        Format the value, or return "Error: <message>".

        A formatter failure is also rendered as an error string.
        """
        if not self.ok:
            return f"Error: {self.error}"
        try:
            return formatter(self.value)
        except Exception as e:
            logger.exception("Formatting failed")
            return f"Error: {e}"


async def _capture(awaitable: Awaitable[T]) -> FetchResult[T]:
    try:
        return FetchResult(value=await awaitable)
    except QQMusicError as e:
        logger.error(f"{type(e).__name__}: {e.message}")
        if e.details:
            logger.debug(f"Details: {e.details}")
        return FetchResult(error=e.message, error_type=type(e).__name__)
    except Exception as e:
        logger.exception("Unexpected error")
        return FetchResult(error=str(e) or type(e).__name__, error_type=type(e).__name__)


def _resolve(config: Config | None, requester: Requester | None) -> tuple[Config, Requester]:
    config = config or Config()
    return config, requester or Requester.from_config(config)


async def fetch_rank(
    chart_type: str = "hot",
    config: Config | None = None,
    requester: Requester | None = None
) -> FetchResult[list[ChartEntry]]:
    """Fetch a chart by key; unknown keys use the hot chart."""
    config, requester = _resolve(config, requester)
    chart = ChartType.from_key(chart_type)
    return await _capture(fetch_chart(chart.top_id, requester, limit=config.charts.limit))


async def fetch_search(
    keyword: str,
    config: Config | None = None,
    requester: Requester | None = None
) -> FetchResult[list[SearchResult]]:
    config, requester = _resolve(config, requester)
    return await _capture(search_songs(keyword, requester, page_size=config.search.page_size))


async def fetch_lyrics_result(
    song_name: str,
    singer: str,
    config: Config | None = None,
    requester: Requester | None = None
) -> FetchResult[LyricsText]:
    config, requester = _resolve(config, requester)
    return await _capture(fetch_lyrics(song_name, singer, requester))


async def get_rank_data(
    chart_type: str = "hot",
    config: Config | None = None,
    requester: Requester | None = None
) -> str:
    """
    Return a formatted chart.

    Args:
        chart_type: One of hot, new, network, mainland, western, korea,
                    japan (case-insensitive). Anything else means hot.
        config: Optional configuration; defaults apply when omitted.
        requester: Optional pre-built transport + retry policy.

    Returns:
        The chart text, "暂无数据" for an empty chart, or "Error: ...".
    """
    chart = ChartType.from_key(chart_type)
    result = await fetch_rank(chart.key, config, requester)
    if result.ok and not result.value:
        return NO_DATA
    return result.render(lambda entries: format_rank_data(entries, chart.title))


async def get_search_data(
    keyword: str,
    config: Config | None = None,
    requester: Requester | None = None
) -> str:
    """Return formatted search hits for ``keyword``, or "Error: ..."."""
    result = await fetch_search(keyword, config, requester)
    return result.render(lambda results: format_search_data(results, keyword))


async def get_lyrics_data(
    song_name: str,
    singer: str,
    config: Config | None = None,
    requester: Requester | None = None
) -> str:
    """Return the formatted lyric of a song, or "Error: ..."."""
    result = await fetch_lyrics_result(song_name, singer, config, requester)
    return result.render(format_lyrics_data)
