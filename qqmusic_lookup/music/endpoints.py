"""
Upstream endpoint URLs and the query parameters they all share.
"""

from qqmusic_lookup.utils import timestamp_ms


TOPLIST_URL = "https://c.y.qq.com/v8/fcg-bin/fcg_v8_toplist_cp.fcg"
SEARCH_URL = "https://c.y.qq.com/soso/fcgi-bin/client_search_cp"
LYRIC_URL = "https://c.y.qq.com/lyric/fcgi-bin/fcg_query_lyric_new.fcg"

# Static token and locale/charset flags required by every endpoint
COMMON_PARAMS = {
    "g_tk": 5381,
    "format": "json",
    "inCharset": "utf-8",
    "outCharset": "utf-8",
    "notice": 0,
    "platform": "h5",
    "needNewCode": 1,
}


def toplist_params(top_id: int) -> dict:
    """Query parameters for one chart, with a fresh cache-busting timestamp."""
    return {
        **COMMON_PARAMS,
        "uin": 0,
        "tpl": 3,
        "page": "detail",
        "type": "top",
        "topid": top_id,
        "_": timestamp_ms(),
    }


def search_params(keyword: str, page_size: int) -> dict:
    """Query parameters for page 1 of a song search."""
    return {
        **COMMON_PARAMS,
        "uin": 0,
        "w": keyword,
        "zhidaqu": 1,
        "catZhida": 1,
        "t": 0,
        "flag": 1,
        "ie": "utf-8",
        "sem": 1,
        "aggr": 0,
        "perpage": page_size,
        "n": page_size,
        "p": 1,
        "remoteplace": "txt.mqq.all",
        "_": timestamp_ms(),
    }


def lyric_params(songmid: str) -> dict:
    """Query parameters for the lyric of ``songmid``."""
    return {
        "songmid": songmid,
        **COMMON_PARAMS,
    }
