"""SQLAlchemy 비동기 엔진 초기화.

기본은 aiosqlite 파일 DB. 데이터베이스 URL만 바꾸면 PostgreSQL(asyncpg)도 사용 가능.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from trendr.infrastructure.database.models import Base

logger = logging.getLogger(__name__)


class Database:
    """엔진과 세션 팩토리를 묶은 핸들. 저장소 구현체에 주입된다."""

    def __init__(self, database_url: str):
        self.url = database_url
        connect_args = {"timeout": 30} if database_url.startswith("sqlite") else {}
        self.engine = create_async_engine(database_url, echo=False, connect_args=connect_args)
        self.session = async_sessionmaker(self.engine, class_=AsyncSession, expire_on_commit=False)

    @property
    def dialect_name(self) -> str:
        return self.engine.dialect.name

    def insert(self, model):
        """충돌 절(ON CONFLICT)을 지원하는 방언별 INSERT 구문."""
        if self.dialect_name == "postgresql":
            return postgresql.insert(model)
        return sqlite.insert(model)

    async def create_schema(self) -> None:
        async with self.engine.begin() as conn:
            if self.dialect_name == "sqlite":
                # 수집 중에도 읽기 쿼리가 막히지 않도록
                await conn.exec_driver_sql("PRAGMA journal_mode=WAL")
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()


async def init_database(database_url: str) -> Database:
    """DB 핸들 생성 및 스키마 생성."""
    db = Database(database_url)
    await db.create_schema()
    logger.info(f"데이터베이스 초기화 완료 ({db.dialect_name})")
    return db


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite는 tzinfo 없이 돌려주므로 UTC로 간주한다."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)
