"""X (Twitter) API v2 어댑터.

검색어마다 최근 트윗 검색(recent search) 한 페이지를 가져온다. 리트윗은 제외.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from trendr.domain.entities import RawAuthor, RawItem
from trendr.domain.exceptions import NetworkError, ParseError
from trendr.domain.value_objects.platform import POST, X
from trendr.domain.value_objects.text import parse_iso_datetime
from trendr.infrastructure.collectors.base import BaseAdapter, to_int

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class XCredentials:
    bearer_token: str


class XAdapter(BaseAdapter):
    BASE_URL = "https://api.twitter.com/2"
    PAGE_SIZE = 100
    REQUEST_DELAY = 1.1

    TWEET_FIELDS = "id,text,author_id,created_at,public_metrics"
    USER_FIELDS = "id,username,name,public_metrics"

    @property
    def platform(self) -> str:
        return X

    async def test_connection(self, credentials: XCredentials) -> bool:
        async with self._client() as client:
            response = await self._request(
                client, "GET", f"{self.BASE_URL}/users/me", headers=self._auth_header(credentials)
            )
        self._check_status(response, "연결 확인")
        return "data" in self._json(response)

    async def fetch_page(self, credentials: XCredentials, target: str) -> list[RawItem]:
        params = {
            "query": f"{target} -is:retweet",
            "tweet.fields": self.TWEET_FIELDS,
            "user.fields": self.USER_FIELDS,
            "expansions": "author_id",
            "max_results": self.PAGE_SIZE,
        }
        async with self._client() as client:
            response = await self._request(
                client,
                "GET",
                f"{self.BASE_URL}/tweets/search/recent",
                params=params,
                headers=self._auth_header(credentials),
            )
        self._check_status(response, f"'{target}' 검색")

        data = self._json(response)
        tweets = data.get("data") or []
        includes = data.get("includes")
        raw_users = includes.get("users") if isinstance(includes, dict) else None
        users = {
            u["id"]: u
            for u in (raw_users if isinstance(raw_users, list) else [])
            if isinstance(u, dict) and isinstance(u.get("id"), str)
        }

        items = self._parse_items(tweets, lambda tweet: self._parse_tweet(tweet, users))
        logger.info(f"[x] '{target}': {len(items)}건 수신")
        return items

    @staticmethod
    def _auth_header(credentials: XCredentials) -> dict[str, str]:
        return {"Authorization": f"Bearer {credentials.bearer_token}"}

    def _check_status(self, response: httpx.Response, context: str) -> None:
        status = response.status_code
        if status == 429:
            raise NetworkError(f"[x] {context}: 요청 한도 초과 (HTTP 429)", retryable=True)
        if status == 401:
            raise NetworkError(f"[x] {context}: 잘못된 bearer 토큰 (HTTP 401)")
        if status == 403:
            raise NetworkError(f"[x] {context}: 접근 거부 - API 플랜 권한 확인 필요 (HTTP 403)")
        if not response.is_success:
            raise NetworkError(
                f"[x] {context}: HTTP {status} {self._error_detail(response)}".rstrip(),
                retryable=status >= 500,
            )

    @staticmethod
    def _error_detail(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return ""
        if isinstance(body, dict):
            return str(body.get("detail") or body.get("title") or "")
        return ""

    def _parse_tweet(self, tweet: dict[str, Any], users: dict[str, dict[str, Any]]) -> RawItem:
        tweet_id = tweet.get("id")
        text = tweet.get("text")
        author_id = tweet.get("author_id")
        if not tweet_id or text is None or not author_id:
            raise ParseError(f"필수 필드 누락 (id={tweet_id})")

        try:
            published_at = parse_iso_datetime(tweet.get("created_at"))
        except ValueError as e:
            raise ParseError(f"created_at 형식 오류 (id={tweet_id})") from e

        metrics = tweet.get("public_metrics") or {}
        return RawItem(
            platform=X,
            platform_id=str(tweet_id),
            content_type=POST,
            author=self._parse_author(author_id, users.get(author_id)),
            primary_text=text,
            likes=to_int(metrics.get("like_count")),
            comments=to_int(metrics.get("reply_count")),
            shares=to_int(metrics.get("retweet_count")),
            views=to_int(metrics.get("impression_count")),
            published_at=published_at,
        )

    @staticmethod
    def _parse_author(author_id: str, user: dict[str, Any] | None) -> RawAuthor:
        if user is None:
            # includes에 사용자 정보가 없으면 id만으로 최소한의 작성자를 만든다
            return RawAuthor(platform_id=author_id, username=author_id)

        user_metrics = user.get("public_metrics")
        return RawAuthor(
            platform_id=author_id,
            username=user.get("username") or author_id,
            display_name=user.get("name"),
            follower_count=to_int((user_metrics or {}).get("followers_count")),
            fresh_profile=user_metrics is not None,
        )
