from __future__ import annotations

from typing import Protocol

from trendr.domain.entities import Topic


class TopicRepository(Protocol):
    """토픽 카탈로그 저장소 인터페이스."""

    async def get_all(self) -> list[Topic]:
        """전체 카탈로그를 결정적 순서로 반환. 읽기 실패 시 StorageError."""
        ...

    async def get_by_name(self, name: str) -> Topic | None: ...

    async def add(self, topic: Topic) -> Topic: ...

    async def count(self) -> int: ...
