"""Test configuration and fixtures"""

import asyncio

import pytest

from qqmusic_lookup.api.requester import Requester


class FakeTransport:
    """Stands in for Transport: returns or raises queued responses in order"""

    referer = "https://y.qq.com"

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    async def get_json(self, url, params, headers=None):
        self.calls.append({
            "url": url,
            "params": dict(params),
            "headers": dict(headers or {}),
        })
        # Yield so concurrent callers interleave
        await asyncio.sleep(0)
        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response


def song_data(name="Test Song", singers=("Test Artist",), album="Test Album",
              interval=245, songmid="mid001"):
    """Song object shaped like the chart/search endpoints return it"""
    data = {
        "songname": name,
        "albumname": album,
        "interval": interval,
        "songmid": songmid,
    }
    if singers is not None:
        data["singer"] = [{"name": singer} for singer in singers]
    return data


def chart_body(*songs):
    return {"songlist": [{"data": song} for song in songs]}


def search_body(*songs):
    return {"data": {"song": {"list": list(songs)}}}


@pytest.fixture
def make_requester():
    """Build a Requester around a FakeTransport with no backoff delay"""
    def _make(*responses, retries=3):
        return Requester(transport=FakeTransport(responses), retries=retries, delay=0)
    return _make
