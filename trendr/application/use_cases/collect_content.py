"""유즈케이스: 플랫폼 한 곳에 대한 수집 루프.

대상(서브레딧/검색어)마다 한 페이지씩 가져와 인제스트한다.
대상 하나의 실패나 항목 하나의 실패는 로그만 남기고 건너뛴다.
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Any

from trendr.application.use_cases.ingest_content import IngestContentUseCase
from trendr.domain.entities import CollectionResult, RawItem
from trendr.domain.exceptions import CollectionError, DomainError, NetworkError
from trendr.domain.services.platform_adapter import PlatformAdapter

logger = logging.getLogger(__name__)


class CollectContentUseCase:
    def __init__(
        self,
        adapter: PlatformAdapter,
        ingest: IngestContentUseCase,
        max_retries: int = 3,
    ):
        self._adapter = adapter
        self._ingest = ingest
        self._max_retries = max(1, max_retries)

    async def execute(self, credentials: Any, targets: list[str]) -> CollectionResult:
        platform = self._adapter.platform
        await self._adapter.prepare(credentials)

        total = CollectionResult()
        for index, target in enumerate(targets):
            # 대상 사이 요청 속도 제한
            if index > 0:
                await asyncio.sleep(self._adapter.request_delay)

            try:
                items = await self._fetch_with_retry(credentials, target)
            except CollectionError as e:
                logger.error(f"[{platform}] '{target}' 가져오기 실패: {e}")
                continue
            except Exception as e:
                logger.error(
                    f"[{platform}] '{target}' 가져오기 중 예기치 않은 오류: "
                    f"{e.__class__.__name__}: {e}"
                )
                continue

            result = await self._ingest_all(items)
            logger.info(
                f"[{platform}] '{target}': {len(items)}건 중 신규 {result.posts_collected}건, "
                f"토픽 링크 {result.topics_extracted}개"
            )
            total.add(result)

        logger.info(
            f"[{platform}] 수집 완료: 신규 {total.posts_collected}건, "
            f"토픽 링크 {total.topics_extracted}개"
        )
        return total

    async def _ingest_all(self, items: list[RawItem]) -> CollectionResult:
        result = CollectionResult()
        for item in items:
            try:
                outcome = await self._ingest.execute(item)
            except DomainError as e:
                logger.warning(f"[{item.platform}] {item.platform_id} 처리 실패: {e}")
                continue
            if outcome.created:
                result.posts_collected += 1
                result.topics_extracted += outcome.topics_linked
        return result

    async def _fetch_with_retry(self, credentials: Any, target: str) -> list[RawItem]:
        platform = self._adapter.platform
        for attempt in range(self._max_retries):
            try:
                return await self._adapter.fetch_page(credentials, target)
            except NetworkError as e:
                if not e.retryable or attempt == self._max_retries - 1:
                    raise
                wait = (2**attempt) + random.uniform(0, 1)
                logger.warning(
                    f"[{platform}] '{target}' 시도 {attempt + 1} 실패: {e}. "
                    f"{wait:.1f}초 후 재시도"
                )
                await asyncio.sleep(wait)
        return []  # unreachable
