# hrms/core/database.py

"""
애플리케이션의 데이터베이스 연결 및 세션 관리를 담당하는 모듈입니다.

- SQLModel의 비동기 엔진을 설정합니다.
- 비동기 세션 생성을 위한 유틸리티 함수를 제공합니다.
- 애플리케이션 시작 시 데이터베이스 테이블을 생성하는 함수를 포함합니다 (개발용).
"""

import logging
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine
from sqlalchemy.orm import sessionmaker
from sqlalchemy import text

from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from hrms.core.config import settings

# =============================================================================
# 모든 도메인 모델 임포트
# =============================================================================
# SQLModel.metadata가 모든 테이블과 관계를 인식하도록 명시적으로 임포트합니다.
from hrms.domains.usr import models     # noqa
from hrms.domains.emp import models     # noqa
from hrms.domains.att import models     # noqa
from hrms.domains.pay import models     # noqa

logger = logging.getLogger(__name__)

# 모든 인사 테이블이 속하는 PostgreSQL 스키마
DB_SCHEMA = "hr"

engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL.get_secret_value(),
    echo=settings.DEBUG_MODE,  # 디버그 모드일 때만 SQL 쿼리 출력
    future=True,
    pool_recycle=3600,  # 1시간마다 연결 재활용
    pool_size=10,
    max_overflow=20
)

# 비동기 세션을 생성하는 '세션 공장'
AsyncSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

# =============================================================================
# 데이터베이스 초기화 및 테이블 생성 함수
# =============================================================================
async def create_db_and_tables() -> None:
    """
    'hr' 스키마 및 테이블을 생성합니다.
    개발 환경에서만 사용해야 하며, 기존 테이블을 삭제하지는 않습니다.
    """
    async with engine.begin() as conn:
        await conn.execute(text(f"CREATE SCHEMA IF NOT EXISTS {DB_SCHEMA}"))
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database schema '%s' and tables are ready.", DB_SCHEMA)


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
