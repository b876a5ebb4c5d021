"""유즈케이스: 토픽 동시 출현 집계."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterable

from trendr.domain.repositories.cooccurrence_repository import CooccurrenceRepository
from trendr.domain.value_objects.topic_pair import unordered_pairs

logger = logging.getLogger(__name__)


class TrackCooccurrenceUseCase:
    """한 콘텐츠에서 함께 추출된 토픽들의 모든 쌍을 1씩 증가시킨다."""

    def __init__(self, cooccurrence_repo: CooccurrenceRepository):
        self._repo = cooccurrence_repo

    async def execute(self, topic_ids: Iterable[str]) -> int:
        pairs = unordered_pairs(topic_ids)
        now = datetime.now(timezone.utc)
        for topic_a_id, topic_b_id in pairs:
            await self._repo.increment(topic_a_id, topic_b_id, seen_at=now)
        logger.debug(f"동시 출현 {len(pairs)}쌍 갱신")
        return len(pairs)
