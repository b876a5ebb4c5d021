"""공용 픽스처: 테스트마다 tmp_path에 파일 기반 SQLite DB를 만든다."""

from __future__ import annotations

import pytest
import pytest_asyncio

from trendr.application.use_cases.extract_topics import ExtractTopicsUseCase
from trendr.application.use_cases.ingest_content import IngestContentUseCase
from trendr.application.use_cases.track_cooccurrence import TrackCooccurrenceUseCase
from trendr.domain.entities import Topic
from trendr.infrastructure.database.engine import init_database
from trendr.infrastructure.database.repositories.content_repo import SqlContentRepository
from trendr.infrastructure.database.repositories.cooccurrence_repo import (
    SqlCooccurrenceRepository,
)
from trendr.infrastructure.database.repositories.creator_repo import SqlCreatorRepository
from trendr.infrastructure.database.repositories.topic_repo import SqlTopicRepository


@pytest_asyncio.fixture
async def db(tmp_path):
    database = await init_database(f"sqlite+aiosqlite:///{tmp_path / 'trendr_test.db'}")
    yield database
    await database.dispose()


@pytest.fixture
def content_repo(db):
    return SqlContentRepository(db)


@pytest.fixture
def creator_repo(db):
    return SqlCreatorRepository(db)


@pytest.fixture
def topic_repo(db):
    return SqlTopicRepository(db)


@pytest.fixture
def cooccurrence_repo(db):
    return SqlCooccurrenceRepository(db)


@pytest_asyncio.fixture
async def catalog(topic_repo):
    """암호화폐 / 개인 재무 두 토픽만 있는 작은 카탈로그."""
    crypto = await topic_repo.add(
        Topic(name="Cryptocurrency", slug="cryptocurrency", keywords=["bitcoin", "crypto"])
    )
    finance = await topic_repo.add(
        Topic(name="Personal Finance", slug="personal-finance", keywords=["budget", "savings"])
    )
    return {"crypto": crypto, "finance": finance}


@pytest.fixture
def ingest(content_repo, creator_repo, topic_repo, cooccurrence_repo):
    return IngestContentUseCase(
        content_repo=content_repo,
        creator_repo=creator_repo,
        extract_topics=ExtractTopicsUseCase(topic_repo),
        track_cooccurrence=TrackCooccurrenceUseCase(cooccurrence_repo),
    )
