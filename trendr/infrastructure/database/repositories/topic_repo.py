"""TopicRepository: SQLAlchemy 구현.

테이블: 'topics'
"""

from __future__ import annotations

import uuid

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from trendr.domain.entities import Topic
from trendr.domain.exceptions import PersistenceError, StorageError
from trendr.infrastructure.database.engine import Database, as_utc
from trendr.infrastructure.database.models import TopicRow


def _topic_from_row(row: TopicRow) -> Topic:
    return Topic(
        id=row.id,
        name=row.name,
        slug=row.slug,
        parent_topic_id=row.parent_topic_id,
        aliases=list(row.aliases or []),
        keywords=list(row.keywords or []),
        created_at=as_utc(row.created_at),
    )


class SqlTopicRepository:
    def __init__(self, db: Database):
        self._db = db

    async def get_all(self) -> list[Topic]:
        try:
            async with self._db.session() as session:
                rows = await session.scalars(
                    select(TopicRow).order_by(TopicRow.created_at, TopicRow.name)
                )
                return [_topic_from_row(r) for r in rows]
        except SQLAlchemyError as e:
            raise StorageError(f"토픽 카탈로그를 읽을 수 없습니다: {e}") from e

    async def get_by_name(self, name: str) -> Topic | None:
        async with self._db.session() as session:
            row = await session.scalar(select(TopicRow).where(TopicRow.name == name))
        return _topic_from_row(row) if row else None

    async def add(self, topic: Topic) -> Topic:
        topic.id = topic.id or str(uuid.uuid4())
        try:
            async with self._db.session() as session:
                session.add(
                    TopicRow(
                        id=topic.id,
                        name=topic.name,
                        slug=topic.slug,
                        parent_topic_id=topic.parent_topic_id,
                        aliases=topic.aliases,
                        keywords=topic.keywords,
                        created_at=topic.created_at,
                    )
                )
                await session.commit()
        except SQLAlchemyError as e:
            raise PersistenceError(f"토픽 저장 실패 '{topic.name}': {e}") from e
        return topic

    async def count(self) -> int:
        async with self._db.session() as session:
            return await session.scalar(select(func.count(TopicRow.id))) or 0
