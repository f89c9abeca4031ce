import logging
from typing import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import text
from sqlmodel.ext.asyncio.session import AsyncSession
from fastapi import FastAPI, Depends, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware

# 핵심 설정 및 데이터베이스 모듈 임포트
from hrms.core.config import settings
from hrms.core.database import engine, get_session, create_db_and_tables

from hrms import API_PREFIX

# 도메인 라우터 임포트
from hrms.domains.usr.routers import router as usr_router
from hrms.domains.emp.routers import router as emp_router
from hrms.domains.att.routers import router as att_router
from hrms.domains.pay.routers import router as pay_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


# -- 애플리케이션 수명 주기 이벤트 핸들러 --
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI 애플리케이션의 수명 주기 이벤트(데이터베이스 연결 풀)를 처리합니다.
    """
    logger.info("HRMS API 시작 중... (env=%s)", settings.APP_ENV)
    if settings.APP_ENV == "development":
        # 개발 환경에서만 스키마와 테이블을 자동 생성 (운영은 별도 마이그레이션 사용)
        await create_db_and_tables()

    yield  # 애플리케이션 실행

    logger.info("HRMS API 종료 중...")
    await engine.dispose()
    logger.info("데이터베이스 연결 풀 종료 완료.")


# -- FastAPI 애플리케이션 인스턴스 생성 --
app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# -- CORS 미들웨어 설정 --
# 프로덕션에서는 'allow_origins'를 실제 프론트엔드 도메인으로 제한해야 합니다.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -- 도메인 라우터 포함 --
app.include_router(usr_router, prefix=f"{API_PREFIX}/usr", tags=["User Management (사용자 관리)"])
app.include_router(emp_router, prefix=f"{API_PREFIX}/emp", tags=["Employee & Department Management (직원 및 부서 관리)"])
app.include_router(att_router, prefix=f"{API_PREFIX}/att", tags=["Attendance Management (근태 관리)"])
app.include_router(pay_router, prefix=f"{API_PREFIX}/pay", tags=["Payroll Management (급여 관리)"])


# -- 루트 엔드포인트 --
@app.get("/", summary="API Root", response_description="Welcome message and documentation link.")
async def read_root():
    """
    HRMS API의 루트 엔드포인트입니다.
    """
    return {"message": "Welcome to HRMS API. Visit /docs for interactive API documentation."}


# -- 헬스 체크 엔드포인트 --
@app.get("/health-check", summary="Health Check", response_description="Status of the application and database connection.")
async def health_check(session: AsyncSession = Depends(get_session)):
    """
    데이터베이스 연결을 테스트하여 서비스의 정상 작동 여부를 확인합니다.
    """
    try:
        result = await session.execute(text("SELECT 1"))
        if result.scalar() == 1:
            return {"status": "ok", "database_connection": "successful"}
    except Exception as e:
        logger.exception("Database health check failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Database connection error during health check: {e}"
        )
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Database health check failed: No result from test query"
    )


# -- Uvicorn 서버 직접 실행 (개발용) --
# if __name__ == "__main__":
#     import uvicorn
#     uvicorn.run("hrms.main:app", host="0.0.0.0", port=8000, reload=True, log_level="info")
