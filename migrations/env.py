# migrations/env.py

"""
PetCare 테이블을 위한 Alembic 실행 환경입니다.

- 모든 테이블은 `settings.DB_SCHEMA` 스키마에 있으며, alembic_version 테이블도 같은 스키마에 둡니다.
- DB_SCHEMA가 비어 있으면(SQLite 등) 스키마 없이 실행하고, SQLite에서는 batch 모드를 사용합니다.
- 온라인 모드: 스키마를 먼저 보장한 뒤 별도 연결에서 마이그레이션을 실행합니다.
- 오프라인 모드: DB 연결 없이 SQL 스크립트를 출력합니다. (`alembic upgrade head --sql`)
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection, make_url
from sqlalchemy.ext.asyncio import create_async_engine
from sqlmodel import SQLModel

from petcare.core.config import settings
from petcare.core.database import create_schema
import petcare.domains.models  # noqa: F401  (SQLModel.metadata에 모든 테이블 등록)

alembic_config = context.config
if alembic_config.config_file_name is not None:
    fileConfig(alembic_config.config_file_name)


def database_url() -> str:
    """alembic.ini의 sqlalchemy.url이 우선이며, 없으면 애플리케이션 설정을 사용합니다."""
    return alembic_config.get_main_option("sqlalchemy.url") or settings.DATABASE_URL.get_secret_value()


def include_object(obj, name, type_, reflected, compare_to) -> bool:
    """PetCare 스키마 밖의 테이블과 버전 테이블은 autogenerate 비교에서 제외합니다."""
    if type_ != "table":
        return True
    if name == "alembic_version":
        return False
    return obj.schema == settings.DB_SCHEMA


def migration_options(dialect_name: str) -> dict:
    return {
        "target_metadata": SQLModel.metadata,
        "include_schemas": bool(settings.DB_SCHEMA),
        "version_table_schema": settings.DB_SCHEMA,
        "include_object": include_object,
        "render_as_batch": dialect_name == "sqlite",
        "compare_type": True,
    }


def run_migrations_offline() -> None:
    url = make_url(database_url())
    context.configure(
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **migration_options(url.get_backend_name()),
    )
    with context.begin_transaction():
        if settings.DB_SCHEMA and url.get_backend_name() != "sqlite":
            context.execute(f'CREATE SCHEMA IF NOT EXISTS "{settings.DB_SCHEMA}"')
        context.run_migrations()


def apply_migrations(connection: Connection) -> None:
    context.configure(connection=connection, **migration_options(connection.dialect.name))
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    engine = create_async_engine(database_url(), echo=settings.DEBUG_MODE, poolclass=pool.NullPool)
    try:
        # 스키마 생성은 마이그레이션과 분리된 트랜잭션에서 먼저 커밋합니다.
        async with engine.begin() as connection:
            await create_schema(connection)

        async with engine.connect() as connection:
            await connection.run_sync(apply_migrations)
            await connection.commit()
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
