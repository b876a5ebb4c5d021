"""Reddit 어댑터 테스트 (httpx.MockTransport)."""

from datetime import datetime, timezone

import httpx
import pytest

from trendr.application.use_cases import collect_content
from trendr.application.use_cases.collect_content import CollectContentUseCase
from trendr.application.use_cases.ingest_content import IngestionResult
from trendr.domain.exceptions import NetworkError, ParseError
from trendr.infrastructure.collectors.reddit_adapter import RedditAdapter, RedditCredentials

CREDS = RedditCredentials("cid", "secret", "user", "pw")


def _listing(*posts):
    return {"kind": "Listing", "data": {"children": [{"kind": "t3", "data": p} for p in posts]}}


POST = {
    "id": "abc123",
    "title": "Bitcoin to the moon",
    "selftext": "Thoughts on #crypto?",
    "author": "satoshi",
    "score": 42,
    "num_comments": 7,
    "created_utc": 1704067200.0,
}


class RedditApi:
    def __init__(self, listing_status=200, listing=None, token_status=200):
        self.token_calls = 0
        self.requests: list[httpx.Request] = []
        self._listing_status = listing_status
        self._listing = listing if listing is not None else _listing(POST)
        self._token_status = token_status

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/api/v1/access_token":
            self.token_calls += 1
            if self._token_status != 200:
                return httpx.Response(self._token_status)
            return httpx.Response(200, json={"access_token": "tok", "expires_in": 3600})
        if request.url.path == "/api/v1/me":
            return httpx.Response(200, json={"name": "user"})
        return httpx.Response(self._listing_status, json=self._listing)


def _adapter(api: RedditApi) -> RedditAdapter:
    return RedditAdapter(transport=httpx.MockTransport(api))


@pytest.mark.asyncio
async def test_fetch_hot_listing():
    api = RedditApi()
    items = await _adapter(api).fetch_page(CREDS, "stocks")

    assert len(items) == 1
    item = items[0]
    assert item.platform == "reddit"
    assert item.platform_id == "abc123"
    assert item.author.platform_id == "satoshi"
    assert item.author.username == "satoshi"
    assert item.primary_text == "Bitcoin to the moon"
    assert item.secondary_text == "Thoughts on #crypto?"
    assert item.likes == 42
    assert item.comments == 7
    assert item.views is None
    assert item.published_at == datetime(2024, 1, 1, tzinfo=timezone.utc)

    listing_request = api.requests[-1]
    assert listing_request.url.host == "oauth.reddit.com"
    assert listing_request.url.path == "/r/stocks/hot"
    assert listing_request.url.params["limit"] == "25"
    assert listing_request.headers["Authorization"] == "Bearer tok"
    assert listing_request.headers["User-Agent"] == "Trendr/1.0.0"


@pytest.mark.asyncio
async def test_token_request_uses_password_grant_and_is_cached():
    api = RedditApi()
    adapter = _adapter(api)

    await adapter.prepare(CREDS)
    await adapter.fetch_page(CREDS, "stocks")
    await adapter.fetch_page(CREDS, "cryptocurrency")

    assert api.token_calls == 1
    token_request = api.requests[0]
    assert token_request.method == "POST"
    assert b"grant_type=password" in token_request.content
    assert token_request.headers["Authorization"].startswith("Basic ")


@pytest.mark.asyncio
async def test_token_failure_raises():
    api = RedditApi(token_status=401)
    with pytest.raises(NetworkError) as exc:
        await _adapter(api).prepare(CREDS)
    assert exc.value.retryable is False


@pytest.mark.asyncio
async def test_malformed_item_skipped():
    broken = {"id": "zzz", "title": "no author"}
    api = RedditApi(listing=_listing(broken, POST))

    items = await _adapter(api).fetch_page(CREDS, "stocks")

    assert [i.platform_id for i in items] == ["abc123"]


@pytest.mark.asyncio
@pytest.mark.parametrize("status,retryable", [(503, True), (429, True), (404, False)])
async def test_http_errors(status, retryable):
    api = RedditApi(listing_status=status, listing={})
    with pytest.raises(NetworkError) as exc:
        await _adapter(api).fetch_page(CREDS, "stocks")
    assert exc.value.retryable is retryable


@pytest.mark.asyncio
async def test_transport_error_is_retryable():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    adapter = RedditAdapter(transport=httpx.MockTransport(handler))
    with pytest.raises(NetworkError) as exc:
        await adapter.fetch_page(CREDS, "stocks")
    assert exc.value.retryable is True


@pytest.mark.asyncio
async def test_test_connection():
    assert await _adapter(RedditApi()).test_connection(CREDS) is True


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "broken",
    [
        {**POST, "id": "far_future", "created_utc": 1e20},
        {**POST, "id": "bad_time", "created_utc": "yesterday"},
    ],
)
async def test_out_of_range_timestamp_skipped(broken):
    api = RedditApi(listing=_listing(broken, POST))
    items = await _adapter(api).fetch_page(CREDS, "stocks")
    assert [i.platform_id for i in items] == ["abc123"]


@pytest.mark.asyncio
async def test_non_dict_post_data_skipped():
    listing = {"data": {"children": [{"kind": "t3", "data": "oops"}, {"kind": "t3", "data": POST}]}}
    items = await _adapter(RedditApi(listing=listing)).fetch_page(CREDS, "stocks")
    assert [i.platform_id for i in items] == ["abc123"]


@pytest.mark.asyncio
async def test_garbage_expires_in_is_parse_error():
    def handler(request):
        return httpx.Response(200, json={"access_token": "tok", "expires_in": "soon"})

    with pytest.raises(ParseError):
        await RedditAdapter(transport=httpx.MockTransport(handler)).prepare(CREDS)


class _RecordingIngest:
    def __init__(self):
        self.seen: list[str] = []

    async def execute(self, item):
        self.seen.append(item.platform_id)
        return IngestionResult(created=True)


@pytest.mark.asyncio
async def test_malformed_item_does_not_stop_run(monkeypatch):
    async def no_sleep(seconds):
        return None

    monkeypatch.setattr(collect_content.asyncio, "sleep", no_sleep)

    good_post = {**POST, "id": "good1"}

    def handler(request):
        if request.url.path == "/api/v1/access_token":
            return httpx.Response(200, json={"access_token": "tok", "expires_in": 3600})
        if request.url.path == "/r/bad/hot":
            return httpx.Response(200, json=_listing({**POST, "created_utc": 1e20}, POST))
        return httpx.Response(200, json=_listing(good_post))

    ingest = _RecordingIngest()
    use_case = CollectContentUseCase(RedditAdapter(transport=httpx.MockTransport(handler)), ingest)

    result = await use_case.execute(CREDS, ["bad", "good"])

    assert ingest.seen == ["abc123", "good1"]
    assert result.posts_collected == 2
