# petcare/core/config.py

from typing import List, Optional
from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict
import os

# 프로젝트의 루트 디렉토리 경로를 계산합니다.
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


class Settings(BaseSettings):
    """
    애플리케이션의 모든 설정을 정의하는 Pydantic BaseSettings 모델입니다.
    환경 변수 및 .env 파일에서 값을 자동으로 로드합니다.
    """

    # --- Pydantic Settings 설정 ---
    model_config = SettingsConfigDict(
        env_file=os.path.join(BASE_DIR, '.env'),  # 프로젝트 루트의 .env 파일을 명시적으로 지정
        env_file_encoding='utf-8',
        extra='ignore',                      # 모델에 없는 변수는 무시
        case_sensitive=True
    )

    # --- 애플리케이션 기본 설정 ---
    APP_NAME: str = "PetCare OData API"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "OData v4 API over pets, pet owners, pet care centers, services, managers and documents"
    APP_ENV: str = Field("development", description="Application environment (e.g., development, production, testing)")
    DEBUG_MODE: bool = Field(False, description="Echo SQL statements and include tracebacks in logs")
    LOG_LEVEL: str = Field("INFO", description="Root logging level")

    # --- 데이터베이스 설정 ---
    DATABASE_URL: SecretStr = Field(..., description="Async SQLAlchemy database URL (postgresql+asyncpg://..., sqlite+aiosqlite://...)")
    # 모든 테이블이 위치할 스키마. SQLite처럼 스키마가 없는 DB에서는 비워둡니다.
    DB_SCHEMA: Optional[str] = Field("ss_test_bknd_226", description="Database schema holding every table")
    CREATE_TABLES_ON_STARTUP: bool = Field(False, description="Create schema and tables when the application starts")

    # --- OData 서비스 설정 ---
    ODATA_NAMESPACE: str = Field("ss_test_bknd", description="EDM schema namespace (persistence unit name)")
    ODATA_SERVICE_PATH: str = Field("ss_test_bknd", description="Root path the OData service is mounted on")
    ODATA_MAX_PAGE_SIZE: int = Field(1000, ge=1, description="Maximum number of entities returned in one response")

    # --- CORS 설정 ---
    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["*"], description="Allowed CORS origins")

    def model_post_init(self, __context) -> None:  # noqa: ANN001
        # 빈 문자열로 지정된 스키마는 "스키마 없음"으로 취급합니다.
        if self.DB_SCHEMA is not None and not self.DB_SCHEMA.strip():
            self.DB_SCHEMA = None
        self.ODATA_SERVICE_PATH = self.ODATA_SERVICE_PATH.strip("/")

    @property
    def odata_root(self) -> str:
        """OData 서비스가 마운트되는 URL 접두사 (예: "/ss_test_bknd")."""
        return f"/{self.ODATA_SERVICE_PATH}"


settings = Settings()
