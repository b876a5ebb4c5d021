from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


@dataclass
class Creator:
    """플랫폼별 작성자 (채널/계정). (platform, platform_id) 당 하나."""

    platform: str
    platform_id: str
    username: str

    id: Optional[str] = None
    display_name: Optional[str] = None
    follower_count: Optional[int] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
