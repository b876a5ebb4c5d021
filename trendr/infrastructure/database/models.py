"""Trendr DB 모델: 콘텐츠 저장소 테이블. (SQLite/PostgreSQL 호환)"""

from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


# ─────────────────────────────────────────────
# 1. 작성자: (platform, platform_id) 유니크
# ─────────────────────────────────────────────
class CreatorRow(Base):
    __tablename__ = "creators"

    id = Column(String(36), primary_key=True)
    platform = Column(String(20), nullable=False)
    platform_id = Column(String(255), nullable=False)
    username = Column(String(255), nullable=False)
    display_name = Column(String(255))
    follower_count = Column(Integer)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow)

    __table_args__ = (
        UniqueConstraint("platform", "platform_id", name="uq_creators_platform_id"),
    )


# ─────────────────────────────────────────────
# 2. 토픽 카탈로그
# ─────────────────────────────────────────────
class TopicRow(Base):
    __tablename__ = "topics"

    id = Column(String(36), primary_key=True)
    name = Column(String(100), nullable=False, unique=True)
    slug = Column(String(100), nullable=False, unique=True)
    parent_topic_id = Column(String(36), ForeignKey("topics.id"), nullable=True)
    aliases = Column(JSON, default=list)
    keywords = Column(JSON, default=list)
    created_at = Column(DateTime(timezone=True), default=utcnow)


# ─────────────────────────────────────────────
# 3. 콘텐츠: (platform, platform_id)가 중복 제거 키
# ─────────────────────────────────────────────
class ContentRow(Base):
    __tablename__ = "content"

    id = Column(String(36), primary_key=True)
    platform = Column(String(20), nullable=False)
    platform_id = Column(String(255), nullable=False)
    creator_id = Column(String(36), ForeignKey("creators.id"), nullable=True)
    content_type = Column(String(20), nullable=False)
    text_content = Column(Text)
    engagement_likes = Column(Integer, default=0)
    engagement_comments = Column(Integer, default=0)
    engagement_shares = Column(Integer, default=0)
    engagement_views = Column(Integer)
    published_at = Column(String(32))  # ISO-8601 UTC
    collected_at = Column(DateTime(timezone=True), default=utcnow)

    __table_args__ = (
        UniqueConstraint("platform", "platform_id", name="uq_content_platform_id"),
        Index("idx_content_platform", "platform", "published_at"),
        Index("idx_content_creator", "creator_id", "published_at"),
        Index("idx_content_collected", "collected_at"),
    )


# ─────────────────────────────────────────────
# 4. 콘텐츠-토픽 링크
# ─────────────────────────────────────────────
class ContentTopicRow(Base):
    __tablename__ = "content_topics"

    content_id = Column(String(36), ForeignKey("content.id", ondelete="CASCADE"), primary_key=True)
    topic_id = Column(String(36), ForeignKey("topics.id", ondelete="CASCADE"), primary_key=True)
    confidence = Column(Float, nullable=False)

    __table_args__ = (Index("idx_content_topics_topic", "topic_id"),)


# ─────────────────────────────────────────────
# 5. 토픽 동시 출현: topic_a_id < topic_b_id
# ─────────────────────────────────────────────
class TopicCooccurrenceRow(Base):
    __tablename__ = "topic_cooccurrences"

    topic_a_id = Column(String(36), ForeignKey("topics.id"), primary_key=True)
    topic_b_id = Column(String(36), ForeignKey("topics.id"), primary_key=True)
    frequency = Column(Integer, nullable=False, default=1)
    last_seen = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), default=utcnow)
