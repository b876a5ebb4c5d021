"""YouTube Data API v3 어댑터.

검색어마다 관련도순 동영상 검색 후, 통계 정보를 50개 단위로 일괄 조회한다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from trendr.domain.entities import RawAuthor, RawItem
from trendr.domain.exceptions import CollectionError, NetworkError, ParseError
from trendr.domain.value_objects.platform import VIDEO, YOUTUBE
from trendr.domain.value_objects.text import parse_iso_datetime
from trendr.infrastructure.collectors.base import BaseAdapter, to_int

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class YouTubeCredentials:
    api_key: str


class YouTubeAdapter(BaseAdapter):
    BASE_URL = "https://www.googleapis.com/youtube/v3"
    SEARCH_PAGE_SIZE = 25
    DETAIL_BATCH_SIZE = 50
    REQUEST_DELAY = 0.2

    @property
    def platform(self) -> str:
        return YOUTUBE

    async def test_connection(self, credentials: YouTubeCredentials) -> bool:
        async with self._client() as client:
            response = await self._request(
                client,
                "GET",
                f"{self.BASE_URL}/search",
                params={"part": "snippet", "q": "test", "maxResults": 1, "key": credentials.api_key},
            )
        if response.status_code == 400:
            raise NetworkError("[youtube] 잘못된 API 키 형식 (HTTP 400)")
        if response.status_code == 403:
            body = response.text
            if "quotaExceeded" in body:
                raise NetworkError("[youtube] API 할당량 초과 (HTTP 403)")
            if "API key not valid" in body:
                raise NetworkError("[youtube] 유효하지 않은 API 키 (HTTP 403)")
            raise NetworkError("[youtube] 접근 거부 - API 활성화 여부 확인 필요 (HTTP 403)")
        self._raise_for_status(response, "연결 확인")
        return True

    async def fetch_page(self, credentials: YouTubeCredentials, target: str) -> list[RawItem]:
        async with self._client() as client:
            video_ids = await self._search(client, credentials, target)
            if not video_ids:
                logger.info(f"[youtube] '{target}': 검색 결과 없음")
                return []

            items: list[RawItem] = []
            for start in range(0, len(video_ids), self.DETAIL_BATCH_SIZE):
                batch = video_ids[start : start + self.DETAIL_BATCH_SIZE]
                try:
                    videos = await self._get_video_details(client, credentials, batch)
                    items.extend(self._parse_items(videos, self._parse_video))
                except CollectionError as e:
                    logger.error(f"[youtube] 상세 조회 실패 ({len(batch)}건 건너뜀): {e}")

        logger.info(f"[youtube] '{target}': {len(items)}건 수신")
        return items

    async def _search(
        self, client: httpx.AsyncClient, credentials: YouTubeCredentials, query: str
    ) -> list[str]:
        response = await self._request(
            client,
            "GET",
            f"{self.BASE_URL}/search",
            params={
                "part": "snippet",
                "q": query,
                "maxResults": self.SEARCH_PAGE_SIZE,
                "type": "video",
                "order": "relevance",
                "key": credentials.api_key,
            },
        )
        if response.status_code == 403:
            raise NetworkError(f"[youtube] '{query}' 검색: 할당량 초과 또는 접근 거부 (HTTP 403)")
        self._raise_for_status(response, f"'{query}' 검색")

        video_ids: list[str] = []
        items = self._json(response).get("items")
        for item in items if isinstance(items, list) else []:
            item_id = item.get("id") if isinstance(item, dict) else None
            video_id = item_id.get("videoId") if isinstance(item_id, dict) else None
            if isinstance(video_id, str) and video_id:
                video_ids.append(video_id)
        return video_ids

    async def _get_video_details(
        self, client: httpx.AsyncClient, credentials: YouTubeCredentials, video_ids: list[str]
    ) -> list[Any]:
        response = await self._request(
            client,
            "GET",
            f"{self.BASE_URL}/videos",
            params={
                "part": "snippet,statistics",
                "id": ",".join(video_ids),
                "key": credentials.api_key,
            },
        )
        self._raise_for_status(response, "동영상 상세 조회")
        return self._json(response).get("items") or []

    def _parse_video(self, video: dict[str, Any]) -> RawItem:
        video_id = video.get("id")
        snippet = video.get("snippet")
        if not video_id or not isinstance(snippet, dict):
            raise ParseError(f"id 또는 snippet 누락 (id={video_id})")

        title = snippet.get("title")
        channel_id = snippet.get("channelId")
        if title is None or not channel_id:
            raise ParseError(f"title 또는 channelId 누락 (id={video_id})")

        try:
            published_at = parse_iso_datetime(snippet.get("publishedAt"))
        except ValueError as e:
            raise ParseError(f"publishedAt 형식 오류 (id={video_id})") from e

        # statistics 값은 문자열로 온다
        stats = video.get("statistics") or {}
        return RawItem(
            platform=YOUTUBE,
            platform_id=str(video_id),
            content_type=VIDEO,
            author=RawAuthor(
                platform_id=channel_id,
                username=channel_id,
                display_name=snippet.get("channelTitle"),
            ),
            primary_text=title,
            secondary_text=snippet.get("description") or "",
            likes=to_int(stats.get("likeCount")),
            comments=to_int(stats.get("commentCount")),
            views=to_int(stats.get("viewCount")),
            published_at=published_at,
        )
