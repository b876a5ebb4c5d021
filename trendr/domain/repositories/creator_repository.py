from __future__ import annotations

from typing import Protocol

from trendr.domain.entities import Creator


class CreatorRepository(Protocol):
    """작성자 저장소 인터페이스. (platform, platform_id)가 충돌 키."""

    async def upsert(self, creator: Creator, refresh_profile: bool = False) -> Creator:
        """없으면 생성. 있으면 refresh_profile일 때만 표시 이름/팔로워 수를 갱신."""
        ...

    async def get_by_platform_id(self, platform: str, platform_id: str) -> Creator | None: ...

    async def count(self) -> int: ...
