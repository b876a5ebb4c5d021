from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


@dataclass
class Content:
    """수집된 콘텐츠 (게시물/영상). 한 번 저장되면 수정하지 않는다."""

    platform: str
    platform_id: str
    content_type: str  # post, video
    text_content: str

    id: Optional[str] = None
    creator_id: Optional[str] = None

    engagement_likes: int = 0
    engagement_comments: int = 0
    engagement_shares: int = 0
    engagement_views: Optional[int] = None

    published_at: Optional[str] = None  # ISO-8601 UTC
    collected_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class ContentTopic:
    content_id: str
    topic_id: str
    confidence: float
