# app/db/session.py
# -----------------------------------------------------------------------------
# 리포트 저장소 DB 연결 (SQLAlchemy Async + aiosqlite)
# - 라우터는 Depends(get_session)으로 요청마다 세션을 받음
# - 커밋 후에도 저장한 Report 의 id/created_at 을 바로 읽을 수 있게 expire 끔
# -----------------------------------------------------------------------------
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from app.core.config import settings

engine = create_async_engine(settings.DATABASE_URL, echo=False)
AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False)
Base = declarative_base()


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """요청 스코프 세션 제공"""
    async with AsyncSessionLocal() as session:
        yield session
