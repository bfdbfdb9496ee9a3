"""
qqmusic-lookup: QQ Music charts, song search and lyrics from the command line.

This package is a thin asynchronous client for the QQ Music web API. It
fetches chart rankings, searches songs and retrieves lyrics, then formats
the results as human-readable text.

Architecture:
    Data flows strictly downward, results flow back up:

    facade.py   get_rank_data / get_search_data / get_lyrics_data
                (never raise, return text or "Error: ...")
    music/      Endpoint adapters, typed records, formatters
    api/        Requester (retry) -> Transport (aiohttp, fixed headers)
    core/       Configuration, exceptions, logging
    cli.py      Command-line interface

Usage:
    Command Line:
        qqmusic rank japan
        qqmusic search 晴天
        qqmusic lyrics 晴天 周杰伦

    Python API:
        import asyncio
        from qqmusic_lookup import get_rank_data, get_search_data, get_lyrics_data

        print(asyncio.run(get_rank_data("hot")))
"""

from qqmusic_lookup.facade import (
    FetchResult,
    fetch_lyrics_result,
    fetch_rank,
    fetch_search,
    get_lyrics_data,
    get_rank_data,
    get_search_data,
)

__version__ = "0.1.0"

__all__ = [
    "get_rank_data",
    "get_search_data",
    "get_lyrics_data",
    "fetch_rank",
    "fetch_search",
    "fetch_lyrics_result",
    "FetchResult",
    "__version__",
]
