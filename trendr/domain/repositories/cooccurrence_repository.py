from __future__ import annotations

from datetime import datetime
from typing import Protocol

from trendr.domain.entities import TopicCooccurrence


class CooccurrenceRepository(Protocol):
    """토픽 동시 출현 저장소 인터페이스. (topic_a_id, topic_b_id)가 충돌 키."""

    async def increment(self, topic_a_id: str, topic_b_id: str, seen_at: datetime) -> None:
        """원자적 증가-또는-삽입. 호출자가 정렬된 쌍을 넘긴다."""
        ...

    async def get(self, topic_a_id: str, topic_b_id: str) -> TopicCooccurrence | None: ...

    async def get_all(self) -> list[TopicCooccurrence]: ...
