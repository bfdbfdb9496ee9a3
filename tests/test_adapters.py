"""Test the chart, search and lyrics adapters against a fake transport"""

import base64

import pytest

from qqmusic_lookup.core.exceptions import FormatError, NotFoundError, TransportError
from qqmusic_lookup.music.charts import fetch_chart
from qqmusic_lookup.music.endpoints import LYRIC_URL, SEARCH_URL, TOPLIST_URL
from qqmusic_lookup.music.lyrics import decode_lyric, fetch_lyrics
from qqmusic_lookup.music.search import search_songs

from tests.conftest import chart_body, search_body, song_data


def encode(text):
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


class TestFetchChart:
    """Test chart fetching and normalization"""

    @pytest.mark.asyncio
    async def test_request_parameters(self, make_requester):
        requester = make_requester(chart_body(song_data()))

        await fetch_chart(17, requester)

        request = requester.transport.calls[0]
        assert request["url"] == TOPLIST_URL
        params = request["params"]
        assert params["topid"] == 17
        assert params["g_tk"] == 5381
        assert params["format"] == "json"
        assert params["platform"] == "h5"
        assert params["type"] == "top"
        assert params["page"] == "detail"
        assert isinstance(params["_"], int)

    @pytest.mark.asyncio
    async def test_caps_at_twenty(self, make_requester):
        songs = [song_data(name=f"Song {i}") for i in range(30)]
        requester = make_requester(chart_body(*songs))

        entries = await fetch_chart(26, requester)

        assert len(entries) == 20
        assert entries[-1].name == "Song 19"

    @pytest.mark.asyncio
    async def test_ranks_follow_output_position(self, make_requester):
        body = {"songlist": [
            {"cur_count": "7", "data": song_data(name="A")},
            {"cur_count": "1"},
            {"cur_count": "3", "data": song_data(name="B")},
        ]}
        requester = make_requester(body)

        entries = await fetch_chart(26, requester)

        assert [(e.rank, e.name) for e in entries] == [(1, "A"), (2, "B")]

    @pytest.mark.asyncio
    async def test_slices_before_filtering(self, make_requester):
        items = [{"data": song_data(name=f"Song {i}")} for i in range(25)]
        items[0] = {"nodata": True}
        items[5] = {"nodata": True}
        requester = make_requester({"songlist": items})

        entries = await fetch_chart(26, requester)

        # Only the first 20 upstream positions are considered
        assert len(entries) == 18
        assert [e.rank for e in entries] == list(range(1, 19))
        assert entries[-1].name == "Song 19"

    @pytest.mark.asyncio
    async def test_transport_failure_after_retries(self, make_requester):
        requester = make_requester(
            TransportError("timeout"), TransportError("timeout"), TransportError("timeout")
        )

        with pytest.raises(TransportError) as exc_info:
            await fetch_chart(26, requester)

        assert exc_info.value.message == "获取排行榜数据失败，请稍后再试"
        assert len(requester.transport.calls) == 3

    @pytest.mark.asyncio
    async def test_recovers_from_transient_failure(self, make_requester):
        requester = make_requester(TransportError("HTTP 502", status=502), chart_body(song_data()))

        entries = await fetch_chart(26, requester)

        assert len(entries) == 1
        assert len(requester.transport.calls) == 2

    @pytest.mark.asyncio
    async def test_format_error_not_retried(self, make_requester):
        requester = make_requester({"code": -1})

        with pytest.raises(FormatError) as exc_info:
            await fetch_chart(26, requester)

        assert exc_info.value.message == "获取排行榜数据格式错误"
        assert len(requester.transport.calls) == 1


class TestSearchSongs:
    """Test song search"""

    @pytest.mark.asyncio
    async def test_request_parameters(self, make_requester):
        requester = make_requester(search_body())

        await search_songs("周杰伦 晴天", requester)

        request = requester.transport.calls[0]
        assert request["url"] == SEARCH_URL
        params = request["params"]
        assert params["w"] == "周杰伦 晴天"
        assert params["perpage"] == 10
        assert params["n"] == 10
        assert params["p"] == 1
        assert params["remoteplace"] == "txt.mqq.all"

    @pytest.mark.asyncio
    async def test_maps_every_entry_in_order(self, make_requester):
        songs = [song_data(name=f"Song {i}", singers=("A", "B")) for i in range(12)]
        requester = make_requester(search_body(*songs))

        results = await search_songs("test", requester)

        assert len(results) == 12
        assert [r.rank for r in results] == list(range(1, 13))
        assert results[0].singer == "A/B"
        assert results[0].songmid == "mid001"

    @pytest.mark.asyncio
    async def test_missing_list(self, make_requester):
        requester = make_requester({"data": {"song": {}}})

        with pytest.raises(FormatError):
            await search_songs("test", requester)

    @pytest.mark.asyncio
    async def test_transport_failure(self, make_requester):
        requester = make_requester(TransportError("HTTP 403", status=403))

        with pytest.raises(TransportError) as exc_info:
            await search_songs("test", requester)

        assert exc_info.value.message == "搜索歌曲失败，请稍后再试"
        # 403 is permanent
        assert len(requester.transport.calls) == 1


class TestFetchLyrics:
    """Test the two-step lyrics lookup"""

    @pytest.mark.asyncio
    async def test_success(self, make_requester):
        lyric = "[ti:晴天]\n故事的小黄花\n从出生那年就飘着"
        requester = make_requester(
            search_body(song_data(songmid="0039MnYb0qxYhV")),
            {"retcode": 0, "lyric": encode(lyric)},
        )

        result = await fetch_lyrics("晴天", "周杰伦", requester)

        assert result.text == lyric
        assert result.song_name == "晴天"
        assert result.singer == "周杰伦"

        search_call, lyric_call = requester.transport.calls
        assert search_call["params"]["w"] == "晴天 周杰伦"
        assert search_call["params"]["n"] == 1
        assert lyric_call["url"] == LYRIC_URL
        assert lyric_call["params"]["songmid"] == "0039MnYb0qxYhV"
        assert lyric_call["headers"]["Referer"] == "https://y.qq.com"

    @pytest.mark.asyncio
    async def test_no_match(self, make_requester):
        requester = make_requester(search_body())

        with pytest.raises(NotFoundError) as exc_info:
            await fetch_lyrics("不存在", "没有人", requester)

        assert exc_info.value.message.startswith("获取歌词失败")
        assert "未找到该歌曲" in exc_info.value.message
        assert len(requester.transport.calls) == 1

    @pytest.mark.asyncio
    async def test_no_lyric_field(self, make_requester):
        requester = make_requester(search_body(song_data()), {"retcode": -1901})

        with pytest.raises(NotFoundError) as exc_info:
            await fetch_lyrics("晴天", "周杰伦", requester)

        assert "暂无歌词" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_search_step_is_retried(self, make_requester):
        requester = make_requester(
            TransportError("timeout"),
            search_body(song_data()),
            {"lyric": encode("la la")},
        )

        result = await fetch_lyrics("Song", "Singer", requester)

        assert result.text == "la la"
        assert len(requester.transport.calls) == 3

    @pytest.mark.asyncio
    async def test_lyric_step_is_retried(self, make_requester):
        requester = make_requester(
            search_body(song_data(songmid="mid042")),
            TransportError("HTTP 503", status=503),
            TransportError("timeout"),
            {"lyric": encode("second try")},
        )

        result = await fetch_lyrics("Song", "Singer", requester)

        assert result.text == "second try"
        lyric_calls = requester.transport.calls[1:]
        assert len(lyric_calls) == 3
        assert all(call["url"] == LYRIC_URL for call in lyric_calls)
        assert all(call["params"]["songmid"] == "mid042" for call in lyric_calls)

    @pytest.mark.asyncio
    async def test_transport_failure_is_wrapped(self, make_requester):
        requester = make_requester(search_body(song_data()), TransportError("HTTP 404", status=404))

        with pytest.raises(TransportError) as exc_info:
            await fetch_lyrics("Song", "Singer", requester)

        assert exc_info.value.message == "获取歌词失败: HTTP 404"


class TestDecodeLyric:
    """Test base64 lyric decoding"""

    @pytest.mark.parametrize("text", [
        "plain ascii lyric",
        "故事的小黄花\n从出生那年就飘着\n",
        "[00:01.00]line one\r\n[00:05.20]line two",
        "",
    ])
    def test_round_trip(self, text):
        assert decode_lyric(encode(text)) == text

    def test_invalid_base64(self):
        with pytest.raises(FormatError):
            decode_lyric("abc")

    def test_invalid_utf8(self):
        with pytest.raises(FormatError):
            decode_lyric(base64.b64encode(b"\xff\xfe\xfa").decode("ascii"))
