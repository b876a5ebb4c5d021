from __future__ import annotations

from typing import Protocol

from trendr.domain.entities import Content, ContentTopic


class ContentRepository(Protocol):
    """콘텐츠 저장소 인터페이스. (platform, platform_id)가 중복 제거 키."""

    async def exists(self, platform: str, platform_id: str) -> bool: ...

    async def add(self, content: Content) -> Content:
        """새 콘텐츠 저장. 유니크 제약 위반 시 PersistenceError."""
        ...

    async def get_by_platform_id(self, platform: str, platform_id: str) -> Content | None: ...

    async def link_topic(self, link: ContentTopic) -> None:
        """(content_id, topic_id) 충돌 시 confidence를 덮어쓴다."""
        ...

    async def get_topic_links(self, content_id: str) -> list[ContentTopic]: ...

    async def list_recent(self, limit: int = 50, offset: int = 0) -> list[Content]: ...

    async def list_by_topic(self, topic_id: str, limit: int = 20) -> list[Content]: ...

    async def count(self) -> int: ...
