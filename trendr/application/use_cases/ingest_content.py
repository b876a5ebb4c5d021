"""유즈케이스: 원시 항목 인제스트.

RawItem 하나를 Creator + Content로 정확히 한 번 저장하고,
토픽 링크와 동시 출현 카운터를 갱신한다. 플랫폼과 무관한 공통 로직.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from trendr.application.use_cases.extract_topics import ExtractTopicsUseCase
from trendr.application.use_cases.track_cooccurrence import TrackCooccurrenceUseCase
from trendr.domain.entities import Content, ContentTopic, Creator, RawItem
from trendr.domain.repositories.content_repository import ContentRepository
from trendr.domain.repositories.creator_repository import CreatorRepository
from trendr.domain.value_objects.text import normalize_text, to_iso_utc

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IngestionResult:
    created: bool
    topics_linked: int = 0


class IngestContentUseCase:
    def __init__(
        self,
        content_repo: ContentRepository,
        creator_repo: CreatorRepository,
        extract_topics: ExtractTopicsUseCase,
        track_cooccurrence: TrackCooccurrenceUseCase,
    ):
        self._content_repo = content_repo
        self._creator_repo = creator_repo
        self._extract_topics = extract_topics
        self._track_cooccurrence = track_cooccurrence

    async def execute(self, item: RawItem) -> IngestionResult:
        # 1. 중복 확인. 이미 있으면 아무 것도 하지 않는다
        if await self._content_repo.exists(item.platform, item.platform_id):
            return IngestionResult(created=False)

        # 2. 작성자 upsert
        author = item.author
        creator = await self._creator_repo.upsert(
            Creator(
                platform=item.platform,
                platform_id=author.platform_id,
                username=author.username,
                display_name=author.display_name,
                follower_count=author.follower_count,
            ),
            refresh_profile=author.fresh_profile,
        )

        # 3~4. 콘텐츠 조립 및 저장 (유니크 위반은 PersistenceError)
        content = await self._content_repo.add(
            Content(
                platform=item.platform,
                platform_id=item.platform_id,
                creator_id=creator.id,
                content_type=item.content_type,
                text_content=normalize_text(item.primary_text, item.secondary_text),
                engagement_likes=item.likes or 0,
                engagement_comments=item.comments or 0,
                engagement_shares=item.shares or 0,
                engagement_views=item.views,
                published_at=to_iso_utc(item.published_at),
            )
        )

        # 5. 토픽 추출 및 링크
        topics = await self._extract_topics.execute(content.text_content)
        for topic in topics:
            await self._content_repo.link_topic(
                ContentTopic(
                    content_id=content.id,
                    topic_id=topic.topic_id,
                    confidence=topic.confidence,
                )
            )

        # 6. 동시 출현
        if len(topics) > 1:
            await self._track_cooccurrence.execute(t.topic_id for t in topics)

        logger.debug(
            f"[{item.platform}] {item.platform_id} 저장: 토픽 {len(topics)}개"
        )
        return IngestionResult(created=True, topics_linked=len(topics))
