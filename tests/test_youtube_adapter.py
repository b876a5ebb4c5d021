"""YouTube Data API v3 어댑터 테스트 (httpx.MockTransport)."""

import httpx
import pytest

from trendr.domain.exceptions import NetworkError
from trendr.infrastructure.collectors.youtube_adapter import YouTubeAdapter, YouTubeCredentials

CREDS = YouTubeCredentials("key")

SEARCH = {
    "items": [
        {"id": {"kind": "youtube#video", "videoId": "v1"}},
        {"id": {"kind": "youtube#video", "videoId": "v2"}},
    ]
}

VIDEOS = {
    "items": [
        {
            "id": "v1",
            "snippet": {
                "title": "How I budget",
                "description": "my savings plan",
                "channelId": "ch1",
                "channelTitle": "Money Channel",
                "publishedAt": "2024-02-01T10:00:00Z",
            },
            "statistics": {"viewCount": "1000", "likeCount": "50", "commentCount": "4"},
        },
        {
            "id": "v2",
            "snippet": {
                "title": "Hidden views",
                "channelId": "ch2",
                "channelTitle": "Other",
                "publishedAt": "2024-02-02T10:00:00Z",
            },
            "statistics": {"likeCount": "3"},
        },
    ]
}


def _adapter(handler) -> YouTubeAdapter:
    return YouTubeAdapter(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_search_then_details():
    captured: list[httpx.Request] = []

    def handler(request):
        captured.append(request)
        if request.url.path.endswith("/search"):
            return httpx.Response(200, json=SEARCH)
        return httpx.Response(200, json=VIDEOS)

    items = await _adapter(handler).fetch_page(CREDS, "budget")

    search, videos = captured
    assert search.url.params["type"] == "video"
    assert search.url.params["order"] == "relevance"
    assert search.url.params["maxResults"] == "25"
    assert videos.url.params["part"] == "snippet,statistics"
    assert videos.url.params["id"] == "v1,v2"

    first, second = items
    assert first.content_type == "video"
    assert first.author.platform_id == "ch1"
    assert first.author.username == "ch1"
    assert first.author.display_name == "Money Channel"
    assert first.primary_text == "How I budget"
    assert first.secondary_text == "my savings plan"
    assert first.views == 1000
    assert first.likes == 50
    assert first.comments == 4

    assert second.views is None
    assert second.comments is None
    assert second.secondary_text == ""


@pytest.mark.asyncio
async def test_no_search_results_skips_details():
    calls: list[str] = []

    def handler(request):
        calls.append(request.url.path)
        return httpx.Response(200, json={"items": []})

    assert await _adapter(handler).fetch_page(CREDS, "nothing") == []
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_failed_detail_batch_is_skipped():
    def handler(request):
        if request.url.path.endswith("/search"):
            return httpx.Response(200, json=SEARCH)
        return httpx.Response(500)

    assert await _adapter(handler).fetch_page(CREDS, "budget") == []


@pytest.mark.asyncio
async def test_search_quota_error():
    def handler(request):
        return httpx.Response(403, json={"error": {"errors": [{"reason": "quotaExceeded"}]}})

    with pytest.raises(NetworkError):
        await _adapter(handler).fetch_page(CREDS, "budget")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status,body,fragment",
    [
        (400, "bad", "형식"),
        (403, '{"reason": "quotaExceeded"}', "할당량"),
        (403, "API key not valid. Please pass a valid API key.", "유효하지 않은"),
    ],
)
async def test_test_connection_errors(status, body, fragment):
    def handler(request):
        return httpx.Response(status, text=body)

    with pytest.raises(NetworkError) as exc:
        await _adapter(handler).test_connection(CREDS)
    assert fragment in str(exc.value)


@pytest.mark.asyncio
async def test_test_connection_ok():
    def handler(request):
        assert request.url.params["maxResults"] == "1"
        return httpx.Response(200, json={"items": []})

    assert await _adapter(handler).test_connection(CREDS) is True


@pytest.mark.asyncio
async def test_malformed_search_and_video_entries_skipped():
    search = {"items": ["junk", {"id": "v9"}, *SEARCH["items"]]}
    videos = {"items": [{**VIDEOS["items"][1], "id": "v2", "statistics": "hidden"}, VIDEOS["items"][0]]}

    def handler(request):
        if request.url.path.endswith("/search"):
            return httpx.Response(200, json=search)
        assert request.url.params["id"] == "v1,v2"
        return httpx.Response(200, json=videos)

    items = await _adapter(handler).fetch_page(CREDS, "budget")

    assert [i.platform_id for i in items] == ["v1"]


@pytest.mark.asyncio
async def test_malformed_detail_list_skips_batch_only():
    def handler(request):
        if request.url.path.endswith("/search"):
            return httpx.Response(200, json=SEARCH)
        return httpx.Response(200, json={"items": {"v1": "wrong shape"}})

    assert await _adapter(handler).fetch_page(CREDS, "budget") == []
