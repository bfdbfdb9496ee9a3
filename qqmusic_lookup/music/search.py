"""
Song search adapter.
"""

from qqmusic_lookup.api.requester import Requester
from qqmusic_lookup.core.exceptions import TransportError
from qqmusic_lookup.core.logger import get_logger
from qqmusic_lookup.music.endpoints import SEARCH_URL, search_params
from qqmusic_lookup.music.models import SearchPayload, SearchResult

logger = get_logger(__name__)

SEARCH_PAGE_SIZE = 10
SEARCH_FAILED = "搜索歌曲失败，请稍后再试"


async def query_search(
    keyword: str,
    page_size: int,
    requester: Requester
) -> list[SearchResult]:
    """
    Run one search request and normalize the hits.

    Errors propagate with their original messages; callers decide how to
    present them.

    Raises:
        TransportError: If the request fails after retries.
        FormatError: If data -> song -> list is missing.
    """
    logger.debug(f"Searching '{keyword}' (page size {page_size})")
    body = await requester.get_json(SEARCH_URL, search_params(keyword, page_size))
    payload = SearchPayload.from_api(body)
    return [SearchResult.from_raw(rank, song) for rank, song in enumerate(payload.songs, start=1)]


async def search_songs(
    keyword: str,
    requester: Requester | None = None,
    page_size: int = SEARCH_PAGE_SIZE
) -> list[SearchResult]:
    """
    Search songs by free-text keyword.

    Args:
        keyword: Search term, URL-encoded by the transport.
        requester: Transport + retry policy. Defaults to Requester().
        page_size: Results requested from page 1. No further cap applies.

    Returns:
        Hits in response order, ranked 1..n.

    Raises:
        TransportError: With a generic message once retries are exhausted.
        FormatError: If the response has no song list.
    """
    requester = requester or Requester()
    try:
        results = await query_search(keyword, page_size, requester)
    except TransportError as e:
        logger.debug(f"搜索歌曲失败: {e}")
        raise e.with_message(SEARCH_FAILED) from e

    logger.info(f"Search '{keyword}' returned {len(results)} result(s)")
    return results
