"""Reddit 어댑터.

OAuth password grant로 토큰을 받아 서브레딧별 hot 목록 한 페이지를 가져온다.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

import httpx

from trendr.domain.entities import RawAuthor, RawItem
from trendr.domain.exceptions import NetworkError, ParseError
from trendr.domain.value_objects.platform import POST, REDDIT
from trendr.infrastructure.collectors.base import BaseAdapter, to_int

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RedditCredentials:
    client_id: str
    client_secret: str
    username: str
    password: str


class RedditAdapter(BaseAdapter):
    TOKEN_URL = "https://www.reddit.com/api/v1/access_token"
    API_BASE = "https://oauth.reddit.com"
    PAGE_SIZE = 25
    REQUEST_DELAY = 1.0
    TOKEN_REFRESH_MARGIN = 60  # 만료 60초 전에 갱신

    def __init__(
        self,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(timeout=timeout, transport=transport)
        self._token: Optional[str] = None
        self._token_owner: Optional[RedditCredentials] = None
        self._token_expires_at = 0.0

    @property
    def platform(self) -> str:
        return REDDIT

    async def prepare(self, credentials: RedditCredentials) -> None:
        """실행 시작 시 토큰을 확보. 실패하면 실행 전체가 실패한다."""
        await self._get_access_token(credentials)

    async def test_connection(self, credentials: RedditCredentials) -> bool:
        token = await self._get_access_token(credentials)
        async with self._client() as client:
            response = await self._request(
                client, "GET", f"{self.API_BASE}/api/v1/me", headers=self._auth_header(token)
            )
        if not response.is_success:
            logger.warning(f"[reddit] 연결 확인 실패: HTTP {response.status_code}")
        return response.is_success

    async def fetch_page(self, credentials: RedditCredentials, target: str) -> list[RawItem]:
        subreddit = target.strip().removeprefix("r/")
        token = await self._get_access_token(credentials)

        async with self._client() as client:
            response = await self._request(
                client,
                "GET",
                f"{self.API_BASE}/r/{subreddit}/hot",
                params={"limit": self.PAGE_SIZE},
                headers=self._auth_header(token),
            )
        if response.status_code == 401:
            # 토큰이 서버 측에서 만료된 경우 다음 시도에서 새로 발급받는다
            self._invalidate_token()
            raise NetworkError(f"[reddit] r/{subreddit}: 인증 만료 (HTTP 401)", retryable=True)
        self._raise_for_status(response, f"r/{subreddit}")

        data = self._json(response)
        try:
            children = data["data"]["children"]
        except (KeyError, TypeError) as e:
            raise ParseError(f"[reddit] r/{subreddit}: listing 형식 오류") from e

        items = self._parse_items(children, self._parse_post)
        logger.info(f"[reddit] r/{subreddit}: {len(items)}건 수신")
        return items

    # ─── 토큰 ───

    async def _get_access_token(self, credentials: RedditCredentials) -> str:
        if (
            self._token
            and self._token_owner == credentials
            and time.monotonic() < self._token_expires_at - self.TOKEN_REFRESH_MARGIN
        ):
            return self._token

        async with self._client() as client:
            response = await self._request(
                client,
                "POST",
                self.TOKEN_URL,
                auth=(credentials.client_id, credentials.client_secret),
                data={
                    "grant_type": "password",
                    "username": credentials.username,
                    "password": credentials.password,
                },
            )
        if not response.is_success:
            raise NetworkError(
                f"[reddit] 토큰 발급 실패: HTTP {response.status_code}",
                retryable=response.status_code >= 500,
            )

        data = self._json(response)
        token = data.get("access_token")
        if not token:
            # 잘못된 계정 정보는 200 + {"error": ...} 로 돌아온다
            raise NetworkError(f"[reddit] 토큰 발급 실패: {data.get('error', '응답에 토큰 없음')}")

        try:
            expires_in = float(data.get("expires_in", 3600))
        except (TypeError, ValueError) as e:
            raise ParseError(f"[reddit] expires_in 형식 오류: {data.get('expires_in')}") from e

        self._token = token
        self._token_owner = credentials
        self._token_expires_at = time.monotonic() + expires_in
        logger.debug("[reddit] 액세스 토큰 발급 완료")
        return token

    def _invalidate_token(self) -> None:
        self._token = None
        self._token_expires_at = 0.0

    @staticmethod
    def _auth_header(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    # ─── 파싱 ───

    def _parse_post(self, child: dict[str, Any]) -> RawItem:
        post = child.get("data") or {}
        post_id = post.get("id")
        author = post.get("author")
        title = post.get("title")
        if not post_id or not author or title is None:
            raise ParseError(f"필수 필드 누락 (id={post_id})")

        created = post.get("created_utc")
        try:
            published_at = (
                datetime.fromtimestamp(float(created), tz=timezone.utc)
                if created is not None
                else None
            )
        except (TypeError, ValueError, OverflowError, OSError) as e:
            raise ParseError(f"created_utc 형식 오류 (id={post_id}): {created}") from e

        return RawItem(
            platform=REDDIT,
            platform_id=str(post_id),
            content_type=POST,
            author=RawAuthor(platform_id=author, username=author),
            primary_text=title,
            secondary_text=post.get("selftext") or "",
            likes=to_int(post.get("score")),
            comments=to_int(post.get("num_comments")),
            published_at=published_at,
        )
