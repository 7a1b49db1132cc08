# petcare/core/database.py

"""
애플리케이션의 데이터베이스 연결 및 세션 관리를 담당하는 모듈입니다.

- SQLAlchemy 비동기 엔진과 SQLModel AsyncSession 팩토리를 설정합니다.
- 요청 단위 세션을 제공하는 FastAPI 의존성(get_session)을 제공합니다.
- 스키마 및 테이블을 생성하는 함수를 포함합니다 (개발/테스트용).
"""

import logging
from typing import Any, AsyncGenerator, Dict
from contextlib import asynccontextmanager

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker

from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from petcare.core.config import settings

logger = logging.getLogger(__name__)


def engine_options(database_url: str) -> Dict[str, Any]:
    """
    DB 종류에 맞는 엔진 옵션을 반환합니다.
    SQLite는 연결 풀 크기 옵션을 지원하지 않으므로 서버형 DB에만 풀 옵션을 적용합니다.
    """
    options: Dict[str, Any] = {"echo": settings.DEBUG_MODE, "future": True}
    if make_url(database_url).get_backend_name() == "sqlite":
        options["connect_args"] = {"check_same_thread": False}
    else:
        options.update(
            pool_recycle=3600,  # 1시간마다 연결 재활용
            pool_size=10,
            max_overflow=20,
            pool_pre_ping=True,
        )
    return options


_database_url = settings.DATABASE_URL.get_secret_value()

engine: AsyncEngine = create_async_engine(_database_url, **engine_options(_database_url))

# 비동기 세션을 생성하는 '세션 공장'을 정의합니다.
AsyncSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

# SQLModel의 기본 MetaData 객체. 모든 테이블 모델은 이 MetaData에 등록됩니다.
metadata = SQLModel.metadata


# =============================================================================
# 데이터베이스 초기화 및 테이블 생성 함수
# =============================================================================
async def create_schema(conn: AsyncConnection) -> None:
    """설정된 스키마가 있고 DB가 스키마를 지원하면 스키마를 생성합니다."""
    if settings.DB_SCHEMA and conn.dialect.name != "sqlite":
        await conn.execute(text(f'CREATE SCHEMA IF NOT EXISTS "{settings.DB_SCHEMA}"'))
        logger.info("Schema '%s' ensured.", settings.DB_SCHEMA)


async def create_db_and_tables(bind: AsyncEngine = None) -> None:
    """
    데이터베이스 스키마 및 테이블을 생성합니다.
    기존 테이블은 삭제하지 않습니다. 운영 환경에서는 Alembic 마이그레이션을 사용하세요.
    """
    # 모든 테이블 모델이 metadata에 등록되도록 임포트합니다.
    import petcare.domains.models  # noqa: F401

    async with (bind or engine).begin() as conn:
        await create_schema(conn)
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database tables created (or already present).")


# =============================================================================
# 비동기 데이터베이스 세션 의존성 주입
# =============================================================================
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI 의존성 주입을 위한 비동기 데이터베이스 세션 제너레이터입니다.
    요청마다 새로운 세션을 생성하고, 요청 처리 후 세션을 자동으로 닫습니다.
    """
    async with AsyncSessionLocal() as session:
        yield session


@asynccontextmanager
async def get_async_session_context() -> AsyncGenerator[AsyncSession, None]:
    """
    스크립트 등 요청 밖의 비동기 컨텍스트에서 사용할 독립적인 세션을 제공합니다.
    정상 종료 시 커밋하고, 예외 발생 시 롤백합니다.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
