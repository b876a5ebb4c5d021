from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


@dataclass
class Topic:
    """토픽 분류 체계의 노드. keywords로 콘텐츠를 매칭한다."""

    name: str
    slug: str

    id: Optional[str] = None
    parent_topic_id: Optional[str] = None
    aliases: list[str] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class ExtractedTopic:
    """토픽 추출 결과 한 건."""

    topic_id: str
    topic_name: str
    confidence: float
    mentions: int


@dataclass
class TopicCooccurrence:
    """같은 콘텐츠에 함께 등장한 토픽 쌍. topic_a_id < topic_b_id."""

    topic_a_id: str
    topic_b_id: str
    frequency: int = 1
    last_seen: Optional[datetime] = None
