from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class RawAuthor:
    """플랫폼 응답에서 얻은 작성자 정보.

    fresh_profile이 True면 매 수집마다 최신 프로필(팔로워 수 등)을 받은 것이므로
    기존 Creator 행을 갱신한다.
    """

    platform_id: str
    username: str
    display_name: Optional[str] = None
    follower_count: Optional[int] = None
    fresh_profile: bool = False


@dataclass
class RawItem:
    """플랫폼 어댑터가 정규화한 원시 항목. 인제스트의 입력."""

    platform: str
    platform_id: str
    content_type: str
    author: RawAuthor
    primary_text: str
    secondary_text: str = ""

    likes: Optional[int] = None
    comments: Optional[int] = None
    shares: Optional[int] = None
    views: Optional[int] = None

    published_at: Optional[datetime] = None
