"""
Utility functions for qqmusic-lookup.

This module provides small helpers shared by the endpoint adapters:
    - Duration formatting (seconds -> M:SS)
    - Performer list joining with placeholders
    - Millisecond timestamps for cache-busting query parameters

Usage:
    from qqmusic_lookup.utils import format_duration, join_singers, timestamp_ms
"""

import time
from typing import Any


UNKNOWN_SINGER = "未知歌手"


def format_duration(seconds: int) -> str:
    """
    Format a duration in whole seconds as ``M:SS``.

    Minutes are not rolled over into hours, matching the upstream web
    player (a 61 minute track is "61:00").

    Args:
        seconds: Total duration in seconds. Negative values clamp to 0.

    Returns:
        Formatted duration string.

    Examples:
        format_duration(245)   # "4:05"
        format_duration(60)    # "1:00"
        format_duration(3661)  # "61:01"
    """
    seconds = max(int(seconds), 0)
    minutes, secs = divmod(seconds, 60)
    return f"{minutes}:{secs:02d}"


def join_singers(singers: Any, placeholder: str = UNKNOWN_SINGER) -> str:
    """
    Join a raw performer list into "A/B/C".

    Args:
        singers: The raw ``singer`` field, expected to be a list of dicts
                 with a ``name`` key. Anything else yields the placeholder.
        placeholder: Used for a performer without a name, and for the whole
                     field when it is missing, not a list, or empty.

    Examples:
        join_singers([{"name": "周杰伦"}, {"name": "费玉清"}])  # "周杰伦/费玉清"
        join_singers([{"name": ""}])                          # "未知歌手"
        join_singers(None)                                    # "未知歌手"
    """
    if not isinstance(singers, list) or not singers:
        return placeholder

    names = []
    for singer in singers:
        name = singer.get("name") if isinstance(singer, dict) else None
        names.append(name if isinstance(name, str) and name else placeholder)
    return "/".join(names)


def timestamp_ms() -> int:
    """Current time in milliseconds since the epoch."""
    return int(time.time() * 1000)
