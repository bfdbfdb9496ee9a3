"""Test the public facade end to end against a fake transport"""

import asyncio
import base64
import logging
import re

import pytest

from qqmusic_lookup.core.config import ChartsConfig, Config, load_config
from qqmusic_lookup.core.exceptions import TransportError
from qqmusic_lookup.facade import (
    FetchResult,
    fetch_rank,
    get_lyrics_data,
    get_rank_data,
    get_search_data,
)

from tests.conftest import chart_body, search_body, song_data

BLOCK_START = re.compile(r"^\d+\. ", re.MULTILINE)


class TestGetRankData:
    """Test get_rank_data"""

    @pytest.mark.asyncio
    async def test_japan_chart(self, make_requester):
        """Three upstream songs render as three numbered blocks"""
        songs = [song_data(name=f"曲{i}", singers=("歌手A", "歌手B")) for i in range(1, 4)]
        requester = make_requester(chart_body(*songs))

        text = await get_rank_data("japan", requester=requester)

        assert requester.transport.calls[0]["params"]["topid"] == 17
        assert text.startswith("🎵 QQ音乐日本榜 Top 20:\n======================\n")
        assert len(BLOCK_START.findall(text)) == 3
        assert "1. 曲1\n   歌手: 歌手A/歌手B\n   专辑: Test Album\n   时长: 4:05\n" in text
        assert text.endswith("----------------------\n")

    @pytest.mark.asyncio
    async def test_unknown_type_uses_hot_chart(self, make_requester):
        requester = make_requester(chart_body(song_data()))

        text = await get_rank_data("billboard", requester=requester)

        assert requester.transport.calls[0]["params"]["topid"] == 26
        assert "热歌榜" in text

    @pytest.mark.asyncio
    async def test_empty_chart(self, make_requester):
        requester = make_requester({"songlist": []})

        assert await get_rank_data("hot", requester=requester) == "暂无数据"

    @pytest.mark.asyncio
    async def test_format_error_rendered_without_retry(self, make_requester):
        requester = make_requester({"songlist": "oops"})

        text = await get_rank_data("hot", requester=requester)

        assert text == "Error: 排行榜数据格式错误"
        assert len(requester.transport.calls) == 1

    @pytest.mark.asyncio
    async def test_transport_failure_rendered(self, make_requester):
        requester = make_requester(*[TransportError("timeout") for _ in range(3)])

        text = await get_rank_data("new", requester=requester)

        assert text == "Error: 获取排行榜数据失败，请稍后再试"

    @pytest.mark.asyncio
    async def test_limit_from_config(self, make_requester):
        songs = [song_data(name=f"Song {i}") for i in range(10)]
        requester = make_requester(chart_body(*songs))
        config = Config(charts=ChartsConfig(limit=5))

        text = await get_rank_data("hot", config=config, requester=requester)

        assert len(BLOCK_START.findall(text)) == 5

    @pytest.mark.asyncio
    async def test_non_finite_interval_keeps_chart(self, make_requester):
        requester = make_requester(chart_body(
            song_data(name="A", interval=245),
            song_data(name="B", interval=float("inf")),
        ))

        text = await get_rank_data("hot", requester=requester)

        assert "1. A\n" in text
        assert "2. B\n   歌手: Test Artist\n   专辑: Test Album\n   时长: 未知时长\n" in text

    @pytest.mark.asyncio
    async def test_failure_logged_once_at_error(self, make_requester, caplog):
        """Adapters log failures at DEBUG; only the facade reports them at ERROR"""
        caplog.set_level(logging.DEBUG, logger="qqmusic_lookup")
        requester = make_requester(TransportError("HTTP 404", status=404))

        await get_rank_data("hot", requester=requester)

        errors = [r for r in caplog.records if r.levelno >= logging.ERROR]
        assert len(errors) == 1
        assert errors[0].name == "qqmusic_lookup.facade"


class TestConcurrentCalls:
    """Entry points share nothing and can run side by side"""

    @pytest.mark.asyncio
    async def test_rank_and_search_together(self, make_requester):
        rank_requester = make_requester(chart_body(*[song_data(name=f"榜{i}") for i in range(3)]))
        search_requester = make_requester(search_body(song_data(name="搜1"), song_data(name="搜2")))

        rank_text, search_text = await asyncio.gather(
            get_rank_data("japan", requester=rank_requester),
            get_search_data("x", requester=search_requester),
        )

        assert rank_text.startswith("🎵 QQ音乐日本榜 Top 20:")
        assert len(BLOCK_START.findall(rank_text)) == 3
        assert "搜" not in rank_text
        assert search_text.startswith('🔍 搜索结果: "x"')
        assert len(BLOCK_START.findall(search_text)) == 2
        assert "榜" not in search_text.split("\n", 1)[1]
        assert len(rank_requester.transport.calls) == 1
        assert len(search_requester.transport.calls) == 1

    @pytest.mark.asyncio
    async def test_one_failure_does_not_affect_the_other(self, make_requester):
        failing = make_requester({"songlist": None})
        working = make_requester(search_body(song_data(name="A")))

        rank_text, search_text = await asyncio.gather(
            get_rank_data("hot", requester=failing),
            get_search_data("a", requester=working),
        )

        assert rank_text == "Error: 获取排行榜数据格式错误"
        assert "1. A\n" in search_text


class TestGetSearchData:
    """Test get_search_data"""

    @pytest.mark.asyncio
    async def test_two_results(self, make_requester):
        requester = make_requester(search_body(song_data(name="A"), song_data(name="B", singers=())))

        text = await get_search_data("test", requester=requester)

        assert text.startswith('🔍 搜索结果: "test"\n')
        assert len(BLOCK_START.findall(text)) == 2
        assert "2. B\n   歌手: 未知歌手\n" in text
        assert "时长" not in text

    @pytest.mark.asyncio
    async def test_no_results_keeps_header(self, make_requester):
        requester = make_requester(search_body())

        text = await get_search_data("nothing", requester=requester)

        assert text == '🔍 搜索结果: "nothing"\n======================\n'

    @pytest.mark.asyncio
    async def test_loaded_config_applies(self, make_requester, tmp_path, monkeypatch):
        """Library callers opt into config.yaml by passing load_config()"""
        monkeypatch.chdir(tmp_path)
        (tmp_path / "config.yaml").write_text("search:\n  page_size: 3\n", encoding="utf-8")
        requester = make_requester(search_body(), search_body())

        await get_search_data("x", requester=requester)
        await get_search_data("x", config=load_config(use_env=False), requester=requester)

        assert [call["params"]["perpage"] for call in requester.transport.calls] == [10, 3]

    @pytest.mark.asyncio
    async def test_format_error(self, make_requester):
        requester = make_requester({"code": 0})

        assert await get_search_data("x", requester=requester) == "Error: 搜索结果格式错误"


class TestGetLyricsData:
    """Test get_lyrics_data"""

    @pytest.mark.asyncio
    async def test_lyrics(self, make_requester):
        lyric = "第一行\n第二行"
        requester = make_requester(
            search_body(song_data()),
            {"lyric": base64.b64encode(lyric.encode("utf-8")).decode("ascii")},
        )

        text = await get_lyrics_data("晴天", "周杰伦", requester=requester)

        assert text == (
            "🎵 晴天 - 周杰伦 的歌词:\n"
            "======================\n"
            "第一行\n第二行\n"
            "======================\n"
        )

    @pytest.mark.asyncio
    async def test_no_match(self, make_requester):
        requester = make_requester(search_body())

        text = await get_lyrics_data("nope", "nobody", requester=requester)

        assert text.startswith("Error: ")
        assert "获取歌词失败" in text


class TestFetchResult:
    """Test the structured result used below the string boundary"""

    def test_render_success(self):
        assert FetchResult(value=[1, 2]).render(lambda v: f"{len(v)} items") == "2 items"

    def test_render_error(self):
        result = FetchResult(error="boom", error_type="TransportError")

        assert not result.ok
        assert result.render(str) == "Error: boom"

    def test_formatter_failure(self):
        def broken(value):
            raise RuntimeError("cannot render")

        assert FetchResult(value="x").render(broken) == "Error: cannot render"

    @pytest.mark.asyncio
    async def test_fetch_rank_keeps_error_type(self, make_requester):
        requester = make_requester({"nothing": True})

        result = await fetch_rank("hot", requester=requester)

        assert not result.ok
        assert result.error_type == "FormatError"
        assert result.error == "获取排行榜数据格式错误"

    @pytest.mark.asyncio
    async def test_unexpected_exception_captured(self, make_requester):
        requester = make_requester(KeyError("surprise"))

        result = await fetch_rank("hot", requester=requester)

        assert not result.ok
        assert result.error_type == "KeyError"
