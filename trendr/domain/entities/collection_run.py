from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class CollectionRunState:
    """프로세스 단위 수집 실행 상태 (메모리에만 존재)."""

    is_running: bool = False
    last_run_at: Optional[datetime] = None
    last_error: Optional[str] = None


@dataclass
class CollectionResult:
    """수집 실행 집계. 이미 있던 콘텐츠는 세지 않는다."""

    posts_collected: int = 0
    topics_extracted: int = 0

    def add(self, other: CollectionResult) -> None:
        self.posts_collected += other.posts_collected
        self.topics_extracted += other.topics_extracted
