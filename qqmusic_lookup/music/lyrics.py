"""
Lyrics adapter.

Resolving a lyric takes two requests, both through Transport + retry:
    1. Search "<song> <singer>" with a single-result page to get a songmid
    2. Query the lyric endpoint for that songmid (Referer header required)

The lyric field is base64; decode_lyric() turns it into plain text.
"""

import base64
import binascii

from qqmusic_lookup.api.requester import Requester
from qqmusic_lookup.core.exceptions import FormatError, NotFoundError, QQMusicError
from qqmusic_lookup.core.logger import get_logger
from qqmusic_lookup.music.endpoints import LYRIC_URL, lyric_params
from qqmusic_lookup.music.models import LyricsPayload, LyricsText
from qqmusic_lookup.music.search import query_search

logger = get_logger(__name__)

LYRICS_FAILED_PREFIX = "获取歌词失败"


def decode_lyric(encoded: str) -> str:
    """
    Decode a base64 lyric field to text.

    Args:
        encoded: Base64 text as returned in the ``lyric`` field.

    Returns:
        The UTF-8 lyric body, newlines preserved.

    Raises:
        FormatError: If the field is not valid base64 or not UTF-8.

    Example:
        decode_lyric("5pm05aSp")  # "晴天"
    """
    try:
        return base64.b64decode(encoded).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise FormatError(
            "歌词解码失败",
            details={"original_error": str(e)}
        ) from e


async def fetch_lyrics(
    song_name: str,
    singer: str,
    requester: Requester | None = None
) -> LyricsText:
    """
    Fetch the lyric of the best search match for a song and singer.

    Args:
        song_name: Song title, also echoed in the result.
        singer: Singer name, also echoed in the result.
        requester: Transport + retry policy. Defaults to Requester().

    Returns:
        LyricsText with the decoded body.

    Raises:
        NotFoundError: If the search has no match or the song has no lyric.
        TransportError, FormatError: On request or shape failures.
        Every error message starts with "获取歌词失败".
    """
    requester = requester or Requester()
    query = f"{song_name} {singer}"

    try:
        hits = await query_search(query, 1, requester)
        if not hits:
            raise NotFoundError("未找到该歌曲", details={"query": query})

        songmid = hits[0].songmid
        if not songmid:
            raise NotFoundError("未找到该歌曲", details={"query": query, "reason": "missing songmid"})

        logger.debug(f"Fetching lyric for songmid={songmid}")
        body = await requester.get_json(
            LYRIC_URL,
            lyric_params(songmid),
            headers={"Referer": requester.transport.referer},
        )

        payload = LyricsPayload.from_api(body)
        if payload.lyric is None:
            raise NotFoundError("暂无歌词", details={"songmid": songmid})

        text = decode_lyric(payload.lyric)
    except QQMusicError as e:
        logger.debug(f"{LYRICS_FAILED_PREFIX}: {e}")
        raise e.with_message(f"{LYRICS_FAILED_PREFIX}: {e.message}") from e

    logger.info(f"Lyrics found: {song_name} - {singer} ({len(text)} chars)")
    return LyricsText(text=text, song_name=song_name, singer=singer)
