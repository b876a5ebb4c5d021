"""CooccurrenceRepository: SQLAlchemy 구현.

테이블: 'topic_cooccurrences'
충돌 키: (topic_a_id, topic_b_id), 항상 topic_a_id < topic_b_id
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from trendr.domain.entities import TopicCooccurrence
from trendr.domain.exceptions import PersistenceError
from trendr.infrastructure.database.engine import Database, as_utc
from trendr.infrastructure.database.models import TopicCooccurrenceRow


def _cooccurrence_from_row(row: TopicCooccurrenceRow) -> TopicCooccurrence:
    return TopicCooccurrence(
        topic_a_id=row.topic_a_id,
        topic_b_id=row.topic_b_id,
        frequency=row.frequency,
        last_seen=as_utc(row.last_seen),
    )


class SqlCooccurrenceRepository:
    def __init__(self, db: Database):
        self._db = db

    async def increment(self, topic_a_id: str, topic_b_id: str, seen_at: datetime) -> None:
        if not topic_a_id < topic_b_id:
            raise ValueError(f"정렬되지 않은 토픽 쌍: ({topic_a_id}, {topic_b_id})")

        # 단일 문장으로 증가-또는-삽입 (동시 실행에서도 유실 없음)
        stmt = self._db.insert(TopicCooccurrenceRow).values(
            topic_a_id=topic_a_id,
            topic_b_id=topic_b_id,
            frequency=1,
            last_seen=seen_at,
            created_at=seen_at,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["topic_a_id", "topic_b_id"],
            set_={
                "frequency": TopicCooccurrenceRow.frequency + 1,
                "last_seen": stmt.excluded.last_seen,
            },
        )
        try:
            async with self._db.session() as session:
                await session.execute(stmt)
                await session.commit()
        except SQLAlchemyError as e:
            raise PersistenceError(f"동시 출현 갱신 실패: {e}") from e

    async def get(self, topic_a_id: str, topic_b_id: str) -> TopicCooccurrence | None:
        async with self._db.session() as session:
            row = await session.get(TopicCooccurrenceRow, (topic_a_id, topic_b_id))
        return _cooccurrence_from_row(row) if row else None

    async def get_all(self) -> list[TopicCooccurrence]:
        async with self._db.session() as session:
            rows = await session.scalars(
                select(TopicCooccurrenceRow).order_by(TopicCooccurrenceRow.frequency.desc())
            )
            return [_cooccurrence_from_row(r) for r in rows]
