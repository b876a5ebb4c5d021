"""유즈케이스: 토픽 추출.

호출마다 카탈로그를 새로 읽어 키워드 매칭을 수행한다.
"""

from __future__ import annotations

from trendr.domain.entities import ExtractedTopic
from trendr.domain.repositories.topic_repository import TopicRepository
from trendr.domain.services.topic_extractor import extract_topics


class ExtractTopicsUseCase:
    def __init__(self, topic_repo: TopicRepository):
        self._topic_repo = topic_repo

    async def execute(self, text: str) -> list[ExtractedTopic]:
        # 카탈로그 로드 실패는 StorageError로 전파된다 (빈 결과와 구분).
        catalog = await self._topic_repo.get_all()
        return extract_topics(text, catalog)
