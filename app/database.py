"""데이터베이스 엔진 및 세션 설정 모듈.

Database engine and session setup.
``build_engine`` picks driver-specific options from the URL so the same
models run on PostgreSQL (asyncpg) in production and SQLite (aiosqlite)
in tests.
"""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, AsyncEngine, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from app.config import settings


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """URL에 맞는 옵션으로 비동기 엔진을 생성합니다.

    Create an async engine for ``url``.

    - asyncpg: pooled, pre-ping, prepared statement cache off
      (트랜잭션 모드 풀러 호환 — transaction-mode poolers)
    - sqlite: single shared connection so ``:memory:`` keeps its schema
    """
    options: dict[str, Any] = {"echo": echo}
    if url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
        options["poolclass"] = StaticPool
    else:
        options.update(pool_pre_ping=True, pool_size=5, max_overflow=10)
        if url.startswith("postgresql+asyncpg"):
            options["connect_args"] = {"statement_cache_size": 0}
    return create_async_engine(url, **options)


engine: AsyncEngine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)

# expire_on_commit=False: 커밋 후에도 응답 변환 시 속성 접근 가능
async_session: async_sessionmaker[AsyncSession] = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """모든 ORM 모델의 선언적 베이스 (Declarative base for all models)."""


async def create_schema(target: AsyncEngine) -> None:
    """ORM 메타데이터로 테이블을 생성합니다 (seed/tests; migrations use alembic)."""
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """요청 단위 비동기 세션 의존성.

    FastAPI dependency yielding one session per request. Routers commit
    explicitly; whatever is left uncommitted is rolled back on close.
    """
    async with async_session() as session:
        try:
            yield session
        finally:
            await session.close()
