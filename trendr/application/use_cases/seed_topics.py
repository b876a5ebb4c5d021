"""유즈케이스: 기본 토픽 시드.

토픽 테이블이 비어 있을 때만 설정된 분류 체계를 넣는다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from trendr.domain.entities import Topic
from trendr.domain.repositories.topic_repository import TopicRepository
from trendr.domain.value_objects.text import slugify

logger = logging.getLogger(__name__)


@dataclass
class TopicSeed:
    name: str
    keywords: list[str] = field(default_factory=list)
    aliases: list[str] = field(default_factory=list)
    parent: Optional[str] = None


class SeedTopicsUseCase:
    def __init__(self, topic_repo: TopicRepository):
        self._topic_repo = topic_repo

    async def execute(self, seeds: list[TopicSeed]) -> int:
        if await self._topic_repo.count() > 0:
            return 0

        created: dict[str, Topic] = {}
        pending = list(seeds)
        # 부모가 먼저 만들어지도록 여러 번에 나눠 처리 (깊이 제한 없음)
        while pending:
            ready = [s for s in pending if not s.parent or s.parent in created]
            if not ready:
                # 부모가 존재하지 않는 토픽을 부모 없이 만든다. 순환 참조면 남은 전부.
                pending_names = {s.name for s in pending}
                ready = [s for s in pending if s.parent not in pending_names] or pending
                for seed in ready:
                    logger.warning(f"토픽 '{seed.name}'의 부모 '{seed.parent}'를 찾을 수 없음")
                orphaned = True
            else:
                orphaned = False

            for seed in ready:
                parent = None if orphaned else created.get(seed.parent or "")
                created[seed.name] = await self._topic_repo.add(
                    Topic(
                        name=seed.name,
                        slug=slugify(seed.name),
                        parent_topic_id=parent.id if parent else None,
                        aliases=list(seed.aliases),
                        keywords=list(seed.keywords),
                    )
                )
            pending = [s for s in pending if s not in ready]

        logger.info(f"기본 토픽 {len(created)}개 시드 완료")
        return len(created)
