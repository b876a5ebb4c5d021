from __future__ import annotations

from typing import Any, Protocol

from trendr.domain.entities import RawItem


class PlatformAdapter(Protocol):
    """플랫폼 API 어댑터 인터페이스.

    각 플랫폼(Reddit, X, YouTube)이 이 인터페이스를 구현하고,
    중복 제거/저장/토픽 추출은 공통 인제스트 유즈케이스가 담당한다.
    """

    @property
    def platform(self) -> str:
        """플랫폼 이름 (reddit, x, youtube)."""
        ...

    @property
    def request_delay(self) -> float:
        """대상 간 요청 사이 대기 시간(초)."""
        ...

    async def prepare(self, credentials: Any) -> None:
        """실행 시작 시 한 번 호출 (토큰 발급 등)."""
        ...

    async def test_connection(self, credentials: Any) -> bool: ...

    async def fetch_page(self, credentials: Any, target: str) -> list[RawItem]:
        """대상(서브레딧/검색어) 하나에 대해 한 페이지를 가져온다."""
        ...
