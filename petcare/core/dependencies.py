# petcare/core/dependencies.py

"""
FastAPI 의존성 주입(Dependency Injection)을 정의하는 모듈입니다.
"""

from typing import AsyncGenerator

from sqlmodel.ext.asyncio.session import AsyncSession

from petcare.core.database import get_session as get_main_app_session


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    요청 단위 비동기 데이터베이스 세션 제너레이터입니다.
    petcare.core.database.get_session을 래핑하여 사용합니다.
    """
    async for session in get_main_app_session():
        yield session
