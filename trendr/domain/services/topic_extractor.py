"""키워드 기반 토픽 추출.

외부 NLP 없이 키워드의 단어 단위 출현 횟수만으로 분류한다.
"""

from __future__ import annotations

import re
from typing import Iterable

from trendr.domain.entities import ExtractedTopic, Topic

MAX_TOPICS = 5
CONFIDENCE_PER_MATCH = 0.2


def count_keyword(text: str, keyword: str) -> int:
    """소문자화된 text에서 keyword가 완전한 단어로 나온 횟수."""
    pattern = rf"\b{re.escape(keyword.lower())}\b"
    return len(re.findall(pattern, text))


def confidence_for(match_count: int) -> float:
    return min(match_count * CONFIDENCE_PER_MATCH, 1.0)


def extract_topics(text: str, catalog: Iterable[Topic]) -> list[ExtractedTopic]:
    """카탈로그의 각 토픽을 text에 대해 점수화하고 상위 5개를 반환.

    신뢰도는 min(매칭 수 * 0.2, 1.0). 동점은 카탈로그 순서를 유지한다.
    """
    normalized = text.lower()
    extracted: list[ExtractedTopic] = []

    for topic in catalog:
        match_count = sum(count_keyword(normalized, kw) for kw in topic.keywords if kw)
        if match_count == 0:
            continue
        extracted.append(
            ExtractedTopic(
                topic_id=topic.id,
                topic_name=topic.name,
                confidence=confidence_for(match_count),
                mentions=match_count,
            )
        )

    extracted.sort(key=lambda t: t.confidence, reverse=True)
    return extracted[:MAX_TOPICS]
