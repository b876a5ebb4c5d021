"""CreatorRepository: SQLAlchemy 구현.

테이블: 'creators'
충돌 키: (platform, platform_id)
"""

from __future__ import annotations

import uuid

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from trendr.domain.entities import Creator
from trendr.domain.exceptions import PersistenceError
from trendr.infrastructure.database.engine import Database, as_utc
from trendr.infrastructure.database.models import CreatorRow, utcnow


def _creator_from_row(row: CreatorRow) -> Creator:
    return Creator(
        id=row.id,
        platform=row.platform,
        platform_id=row.platform_id,
        username=row.username,
        display_name=row.display_name,
        follower_count=row.follower_count,
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


class SqlCreatorRepository:
    def __init__(self, db: Database):
        self._db = db

    async def upsert(self, creator: Creator, refresh_profile: bool = False) -> Creator:
        now = utcnow()
        stmt = self._db.insert(CreatorRow).values(
            id=creator.id or str(uuid.uuid4()),
            platform=creator.platform,
            platform_id=creator.platform_id,
            username=creator.username,
            display_name=creator.display_name,
            follower_count=creator.follower_count,
            created_at=now,
            updated_at=now,
        )
        if refresh_profile:
            stmt = stmt.on_conflict_do_update(
                index_elements=["platform", "platform_id"],
                set_={
                    "display_name": stmt.excluded.display_name,
                    "follower_count": stmt.excluded.follower_count,
                    "updated_at": now,
                },
            )
        else:
            stmt = stmt.on_conflict_do_nothing(index_elements=["platform", "platform_id"])

        try:
            async with self._db.session() as session:
                await session.execute(stmt)
                row = await session.scalar(
                    select(CreatorRow).where(
                        CreatorRow.platform == creator.platform,
                        CreatorRow.platform_id == creator.platform_id,
                    )
                )
                await session.commit()
        except SQLAlchemyError as e:
            raise PersistenceError(f"작성자 저장 실패: {e}") from e
        return _creator_from_row(row)

    async def get_by_platform_id(self, platform: str, platform_id: str) -> Creator | None:
        async with self._db.session() as session:
            row = await session.scalar(
                select(CreatorRow).where(
                    CreatorRow.platform == platform, CreatorRow.platform_id == platform_id
                )
            )
        return _creator_from_row(row) if row else None

    async def count(self) -> int:
        async with self._db.session() as session:
            return await session.scalar(select(func.count(CreatorRow.id))) or 0
