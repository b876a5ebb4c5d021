"""의존성 주입 컨테이너.

클린 아키텍처에서 모든 의존성 조립은 최외곽(Composition Root)에서 이루어진다.
이 컨테이너가 설정에 따라 구체 구현을 생성하고 유즈케이스에 주입한다.
"""

from __future__ import annotations

from typing import Optional

import httpx

from trendr.application.use_cases.extract_topics import ExtractTopicsUseCase
from trendr.application.use_cases.ingest_content import IngestContentUseCase
from trendr.application.use_cases.orchestrator import CollectionOrchestrator
from trendr.application.use_cases.run_coordinator import RunCoordinator
from trendr.application.use_cases.scheduler import CollectionScheduler
from trendr.application.use_cases.seed_topics import SeedTopicsUseCase, TopicSeed
from trendr.application.use_cases.track_cooccurrence import TrackCooccurrenceUseCase
from trendr.domain.services.platform_adapter import PlatformAdapter
from trendr.domain.value_objects.platform import REDDIT, X, YOUTUBE
from trendr.infrastructure.collectors.reddit_adapter import RedditAdapter
from trendr.infrastructure.collectors.x_adapter import XAdapter
from trendr.infrastructure.collectors.youtube_adapter import YouTubeAdapter
from trendr.infrastructure.config.credentials import SettingsCredentialProvider
from trendr.infrastructure.config.settings import AppConfig, Settings
from trendr.infrastructure.database.engine import Database
from trendr.infrastructure.database.repositories.content_repo import SqlContentRepository
from trendr.infrastructure.database.repositories.cooccurrence_repo import (
    SqlCooccurrenceRepository,
)
from trendr.infrastructure.database.repositories.creator_repo import SqlCreatorRepository
from trendr.infrastructure.database.repositories.topic_repo import SqlTopicRepository


class Container:
    """애플리케이션 의존성 컨테이너."""

    def __init__(
        self,
        settings: Settings,
        app_config: AppConfig,
        db: Database,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings
        self.config = app_config
        self.db = db
        self._transport = transport

        # ─── Repositories (SQLAlchemy) ───
        self.content_repo = SqlContentRepository(db)
        self.creator_repo = SqlCreatorRepository(db)
        self.topic_repo = SqlTopicRepository(db)
        self.cooccurrence_repo = SqlCooccurrenceRepository(db)

        # ─── Use Cases ───
        self.extract_topics = ExtractTopicsUseCase(self.topic_repo)
        self.track_cooccurrence = TrackCooccurrenceUseCase(self.cooccurrence_repo)
        self.ingest = IngestContentUseCase(
            content_repo=self.content_repo,
            creator_repo=self.creator_repo,
            extract_topics=self.extract_topics,
            track_cooccurrence=self.track_cooccurrence,
        )

        # ─── Adapters ───
        self.adapters: dict[str, PlatformAdapter] = {}
        self._init_adapters()

        # ─── Orchestration ───
        self.credential_provider = SettingsCredentialProvider(settings, app_config)
        self.coordinator = RunCoordinator()
        self.orchestrator = CollectionOrchestrator(
            adapters=self.adapters,
            credential_provider=self.credential_provider,
            ingest=self.ingest,
            coordinator=self.coordinator,
            max_retries=app_config.max_retries,
        )
        self.scheduler: Optional[CollectionScheduler] = None

    def _init_adapters(self) -> None:
        collector_configs = self.config.collectors
        timeout = self.settings.http_timeout_seconds
        factories = {REDDIT: RedditAdapter, X: XAdapter, YOUTUBE: YouTubeAdapter}

        for platform, factory in factories.items():
            cfg = collector_configs.get(platform)
            if cfg is not None and cfg.enabled:
                self.adapters[platform] = factory(timeout=timeout, transport=self._transport)

    # ─── 팩토리 ───

    def create_scheduler(self) -> CollectionScheduler:
        intervals = {
            platform: cfg.interval_minutes
            for platform, cfg in self.config.collectors.items()
            if cfg.enabled
        }
        self.scheduler = CollectionScheduler(
            self.orchestrator, intervals, timezone=self.config.timezone
        )
        return self.scheduler

    def seed_topics_use_case(self) -> SeedTopicsUseCase:
        return SeedTopicsUseCase(self.topic_repo)

    def topic_seeds(self) -> list[TopicSeed]:
        return [
            TopicSeed(name=t.name, keywords=t.keywords, aliases=t.aliases, parent=t.parent)
            for t in self.config.topics
        ]
