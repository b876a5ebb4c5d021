"""수집 오케스트레이터.

플랫폼별 "수집 실행" 진입점을 제공한다. 설정 검증 → 실행 가드 획득 →
플랫폼 수집 → 가드 해제(항상) 순서로 진행한다.
"""

from __future__ import annotations

import logging
from typing import Optional

from trendr.application.use_cases.collect_content import CollectContentUseCase
from trendr.application.use_cases.ingest_content import IngestContentUseCase
from trendr.application.use_cases.run_coordinator import RunCoordinator
from trendr.domain.entities import CollectionResult, CollectionRunState
from trendr.domain.exceptions import AlreadyRunningError, ConfigurationError
from trendr.domain.services.credential_provider import CredentialProvider
from trendr.domain.services.platform_adapter import PlatformAdapter

logger = logging.getLogger(__name__)


class CollectionOrchestrator:
    def __init__(
        self,
        adapters: dict[str, PlatformAdapter],
        credential_provider: CredentialProvider,
        ingest: IngestContentUseCase,
        coordinator: RunCoordinator,
        max_retries: int = 3,
    ):
        self._adapters = adapters
        self._credentials = credential_provider
        self._ingest = ingest
        self._coordinator = coordinator
        self._max_retries = max_retries

    @property
    def platforms(self) -> list[str]:
        return list(self._adapters)

    def status(self) -> CollectionRunState:
        return self._coordinator.status()

    async def run_reddit(self) -> CollectionResult:
        return await self.run("reddit")

    async def run_x(self) -> CollectionResult:
        return await self.run("x")

    async def run_youtube(self) -> CollectionResult:
        return await self.run("youtube")

    async def run(self, platform: str) -> CollectionResult:
        adapter = self._get_adapter(platform)
        credentials = self._require_credentials(platform)
        targets = self._credentials.get_targets(platform)
        if not targets:
            raise ConfigurationError(f"{platform} 수집 대상이 설정되지 않았습니다.")

        if not self._coordinator.try_acquire():
            raise AlreadyRunningError()

        logger.info(f"[{platform}] 수집 시작: 대상 {len(targets)}개")
        error: Optional[str] = "수집이 중단되었습니다."
        try:
            use_case = CollectContentUseCase(adapter, self._ingest, max_retries=self._max_retries)
            result = await use_case.execute(credentials, targets)
            error = None
            return result
        except Exception as e:
            error = str(e) or e.__class__.__name__
            logger.error(f"[{platform}] 수집 실패: {error}")
            raise
        finally:
            self._coordinator.release(error)

    async def test_connection(self, platform: str) -> bool:
        adapter = self._get_adapter(platform)
        credentials = self._require_credentials(platform)
        return await adapter.test_connection(credentials)

    def _get_adapter(self, platform: str) -> PlatformAdapter:
        adapter = self._adapters.get(platform)
        if adapter is None:
            raise ValueError(f"'{platform}' 어댑터가 등록되지 않음")
        return adapter

    def _require_credentials(self, platform: str):
        credentials = self._credentials.get_credentials(platform)
        if credentials is None:
            raise ConfigurationError(f"{platform} 자격 증명이 설정되지 않았습니다.")
        return credentials
