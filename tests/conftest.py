# tests/conftest.py

import os
import json
from pathlib import Path
from typing import Any, AsyncGenerator, Dict

# 설정 객체가 만들어지기 전에 테스트용 DB 설정을 지정합니다.
# SQLite는 스키마를 지원하지 않으므로 DB_SCHEMA를 비워 둡니다.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("DB_SCHEMA", "")

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

# petcare.main을 임포트하여 FastAPI 앱 인스턴스에 접근합니다.
from petcare.main import app as main_app
from petcare.core import dependencies as deps
from petcare.core.config import settings
from petcare.core.database import get_session

# --- 모든 모델 임포트 ---
#  SQLModel.metadata.create_all()이 모든 테이블을 인식하려면 모든 모델 클래스가 임포트되어야 합니다.
from petcare.domains.models import *    # noqa: F401, F403

FIXTURES_DIR = Path(__file__).parent / "fixtures"

# --- 테스트용 데이터베이스 설정 ---
# 테스트마다 새로운 인메모리 SQLite DB를 사용합니다.
TEST_DATABASE_URL = "sqlite+aiosqlite://"

ODATA_ROOT = settings.odata_root


def load_fixture(name: str) -> Dict[str, Any]:
    """tests/fixtures 아래의 JSON 페이로드를 읽어 반환합니다."""
    with open(FIXTURES_DIR / name, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture(scope="session")
def entity_payloads() -> Dict[str, Dict[str, Any]]:
    """엔티티셋 이름 -> 생성용 JSON 페이로드."""
    return load_fixture("entities.json")


# --- 데이터베이스 픽스처 ---
@pytest_asyncio.fixture(scope="function")
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    테스트 함수마다 모든 테이블이 생성된 인메모리 DB 엔진을 제공합니다.
    StaticPool로 하나의 연결을 공유해야 인메모리 DB의 내용이 유지됩니다.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """테스트용 비동기 데이터베이스 세션을 제공합니다."""
    TestingSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with TestingSessionLocal() as session:
        yield session


# --- 클라이언트 픽스처 ---
@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    세션 의존성을 테스트 세션으로 교체한 AsyncClient를 반환합니다.
    """
    async def override_get_session():
        yield db_session

    original_overrides = main_app.dependency_overrides.copy()
    try:
        main_app.dependency_overrides.update({
            get_session: override_get_session,
            deps.get_db_session: override_get_session,
        })
        transport = ASGITransport(app=main_app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        # 테스트가 끝난 후 원래 의존성 상태로 되돌립니다.
        main_app.dependency_overrides.clear()
        main_app.dependency_overrides.update(original_overrides)


@pytest.fixture(scope="session")
def odata_root() -> str:
    return ODATA_ROOT
