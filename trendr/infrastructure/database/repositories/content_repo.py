"""ContentRepository: SQLAlchemy 구현.

테이블: 'content', 'content_topics'
중복 제거 키: (platform, platform_id)
"""

from __future__ import annotations

import uuid

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from trendr.domain.entities import Content, ContentTopic
from trendr.domain.exceptions import PersistenceError
from trendr.infrastructure.database.engine import Database, as_utc
from trendr.infrastructure.database.models import ContentRow, ContentTopicRow


def _content_from_row(row: ContentRow) -> Content:
    return Content(
        id=row.id,
        platform=row.platform,
        platform_id=row.platform_id,
        creator_id=row.creator_id,
        content_type=row.content_type,
        text_content=row.text_content or "",
        engagement_likes=row.engagement_likes or 0,
        engagement_comments=row.engagement_comments or 0,
        engagement_shares=row.engagement_shares or 0,
        engagement_views=row.engagement_views,
        published_at=row.published_at,
        collected_at=as_utc(row.collected_at),
    )


class SqlContentRepository:
    def __init__(self, db: Database):
        self._db = db

    async def exists(self, platform: str, platform_id: str) -> bool:
        try:
            async with self._db.session() as session:
                found = await session.scalar(
                    select(ContentRow.id)
                    .where(ContentRow.platform == platform, ContentRow.platform_id == platform_id)
                    .limit(1)
                )
        except SQLAlchemyError as e:
            raise PersistenceError(f"콘텐츠 조회 실패: {e}") from e
        return found is not None

    async def add(self, content: Content) -> Content:
        content.id = content.id or str(uuid.uuid4())
        row = ContentRow(
            id=content.id,
            platform=content.platform,
            platform_id=content.platform_id,
            creator_id=content.creator_id,
            content_type=content.content_type,
            text_content=content.text_content,
            engagement_likes=content.engagement_likes,
            engagement_comments=content.engagement_comments,
            engagement_shares=content.engagement_shares,
            engagement_views=content.engagement_views,
            published_at=content.published_at,
            collected_at=content.collected_at,
        )
        try:
            async with self._db.session() as session:
                session.add(row)
                await session.commit()
        except IntegrityError as e:
            raise PersistenceError(
                f"콘텐츠 중복 저장 시도: {content.platform}/{content.platform_id}"
            ) from e
        except SQLAlchemyError as e:
            raise PersistenceError(f"콘텐츠 저장 실패: {e}") from e
        return content

    async def get_by_platform_id(self, platform: str, platform_id: str) -> Content | None:
        async with self._db.session() as session:
            row = await session.scalar(
                select(ContentRow).where(
                    ContentRow.platform == platform, ContentRow.platform_id == platform_id
                )
            )
        return _content_from_row(row) if row else None

    async def link_topic(self, link: ContentTopic) -> None:
        stmt = self._db.insert(ContentTopicRow).values(
            content_id=link.content_id,
            topic_id=link.topic_id,
            confidence=link.confidence,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["content_id", "topic_id"],
            set_={"confidence": stmt.excluded.confidence},
        )
        try:
            async with self._db.session() as session:
                await session.execute(stmt)
                await session.commit()
        except SQLAlchemyError as e:
            raise PersistenceError(f"토픽 링크 저장 실패: {e}") from e

    async def get_topic_links(self, content_id: str) -> list[ContentTopic]:
        async with self._db.session() as session:
            rows = await session.scalars(
                select(ContentTopicRow)
                .where(ContentTopicRow.content_id == content_id)
                .order_by(ContentTopicRow.confidence.desc())
            )
            return [
                ContentTopic(content_id=r.content_id, topic_id=r.topic_id, confidence=r.confidence)
                for r in rows
            ]

    async def list_recent(self, limit: int = 50, offset: int = 0) -> list[Content]:
        async with self._db.session() as session:
            rows = await session.scalars(
                select(ContentRow)
                .order_by(ContentRow.collected_at.desc())
                .limit(limit)
                .offset(offset)
            )
            return [_content_from_row(r) for r in rows]

    async def list_by_topic(self, topic_id: str, limit: int = 20) -> list[Content]:
        async with self._db.session() as session:
            rows = await session.scalars(
                select(ContentRow)
                .join(ContentTopicRow, ContentTopicRow.content_id == ContentRow.id)
                .where(ContentTopicRow.topic_id == topic_id)
                .order_by(ContentRow.collected_at.desc())
                .limit(limit)
            )
            return [_content_from_row(r) for r in rows]

    async def count(self) -> int:
        async with self._db.session() as session:
            return await session.scalar(select(func.count(ContentRow.id))) or 0
