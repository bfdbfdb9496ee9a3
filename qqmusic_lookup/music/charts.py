"""
Chart ranking adapter.

Fetches one QQ Music toplist and normalizes its first entries into
ChartEntry records.
"""

from qqmusic_lookup.api.requester import Requester
from qqmusic_lookup.core.exceptions import TransportError
from qqmusic_lookup.core.logger import get_logger
from qqmusic_lookup.music.endpoints import TOPLIST_URL, toplist_params
from qqmusic_lookup.music.models import ChartEntry, ChartPayload

logger = get_logger(__name__)

CHART_LIMIT = 20
CHART_FETCH_FAILED = "获取排行榜数据失败，请稍后再试"


async def fetch_chart(
    top_id: int,
    requester: Requester | None = None,
    limit: int = CHART_LIMIT
) -> list[ChartEntry]:
    """
    Fetch a chart and return its top entries.

    Args:
        top_id: Upstream chart id (see ChartType).
        requester: Transport + retry policy. Defaults to Requester().
        limit: Number of upstream positions considered.

    Returns:
        Up to ``limit`` entries ranked 1..n by output position. Upstream
        items without a ``data`` payload are dropped after slicing, so
        fewer than ``limit`` entries is possible.

    Raises:
        TransportError: With a generic message once retries are exhausted.
        FormatError: If the body has no ``songlist`` list.
    """
    requester = requester or Requester()
    params = toplist_params(top_id)

    logger.debug(f"Fetching chart topid={top_id}")
    try:
        body = await requester.get_json(TOPLIST_URL, params)
    except TransportError as e:
        logger.debug(f"获取QQ音乐数据失败: {e}")
        raise e.with_message(CHART_FETCH_FAILED) from e

    payload = ChartPayload.from_api(body)

    songs = [song for song in payload.songs[:limit] if song is not None]
    entries = [ChartEntry.from_raw(rank, song) for rank, song in enumerate(songs, start=1)]

    skipped = min(len(payload.songs), limit) - len(entries)
    if skipped:
        logger.debug(f"Skipped {skipped} chart item(s) without data")
    logger.info(f"Chart topid={top_id}: {len(entries)} entries")
    return entries
