import logging
from typing import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import text
from sqlmodel.ext.asyncio.session import AsyncSession
from fastapi import FastAPI, Depends, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware

# 핵심 설정 및 데이터베이스 모듈 임포트
from petcare.core.config import settings
from petcare.core.database import create_db_and_tables, engine, get_session
from petcare.core.exceptions import register_exception_handlers

# OData 서비스 라우터
from petcare.odata.routers import router as odata_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


# -- 애플리케이션 수명 주기 이벤트 핸들러 --
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI 애플리케이션의 수명 주기 이벤트(테이블 생성, 연결 풀 종료)를 처리합니다.
    """
    logger.info("%s %s 시작 중 (env=%s)...", settings.APP_NAME, settings.APP_VERSION, settings.APP_ENV)
    if settings.CREATE_TABLES_ON_STARTUP:
        await create_db_and_tables()
        logger.info("데이터베이스 스키마/테이블 생성 완료.")
    else:
        logger.info("테이블 자동 생성을 건너뜁니다. (Alembic 마이그레이션 사용)")

    yield  # 애플리케이션 실행

    logger.info("애플리케이션 종료 중...")
    await engine.dispose()
    logger.info("데이터베이스 연결 풀 종료 완료.")


# -- FastAPI 애플리케이션 인스턴스 생성 --
app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# -- 전역 예외 처리기 등록 (모든 오류를 ApiError 형태로 반환) --
register_exception_handlers(app)

# -- CORS 미들웨어 설정 --
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# -- OData 버전 헤더 --
# OData 서비스 경로 아래의 모든 응답(오류 포함)에 OData-Version을 붙입니다.
@app.middleware("http")
async def add_odata_version_header(request: Request, call_next):
    response = await call_next(request)
    if request.url.path.startswith(settings.odata_root):
        response.headers["OData-Version"] = "4.0"
    return response


# -- OData 라우터 포함 --
app.include_router(odata_router, prefix=settings.odata_root)


# -- 루트 엔드포인트 --
@app.get("/", summary="API Root", response_description="Welcome message and documentation link.")
async def read_root():
    """
    PetCare OData API의 루트 엔드포인트입니다.
    API의 시작점을 알리고 문서 및 서비스 문서 링크를 제공합니다.
    """
    return {
        "message": (
            f"Welcome to {settings.APP_NAME}. Visit /docs for interactive API documentation "
            f"or {settings.odata_root}/ for the OData service document."
        )
    }


# -- 헬스 체크 엔드포인트 --
@app.get("/health-check", summary="Health Check", response_description="Status of the application and database connection.")
async def health_check(session: AsyncSession = Depends(get_session)):
    """
    애플리케이션의 헬스 체크 엔드포인트입니다.
    데이터베이스 연결을 테스트하여 서비스의 정상 작동 여부를 확인합니다.
    """
    try:
        result = await session.execute(text("SELECT 1"))
        if result.scalar() == 1:
            return {"status": "ok", "database_connection": "successful"}
    except Exception as e:
        logger.error("Database health check failed: %s", e)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Database connection error during health check: {e}"
        ) from e
    raise HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Database health check failed: No result from test query"
    )


# -- Uvicorn 서버 직접 실행 (개발용) --
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("petcare.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG_MODE, log_level=settings.LOG_LEVEL.lower())
