# tests/conftest.py

import os
from types import SimpleNamespace
from typing import AsyncGenerator, Callable, Awaitable
from contextlib import asynccontextmanager

# hrms 패키지를 임포트하기 전에 필수 설정값을 지정합니다. (실제 DB에는 연결하지 않음)
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test_hrms.db")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-hrms")

import pytest_asyncio  # noqa: E402
from httpx import AsyncClient, ASGITransport  # noqa: E402

from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402
from sqlmodel.ext.asyncio.session import AsyncSession  # noqa: E402

# hrms.main을 임포트하여 FastAPI 앱 인스턴스에 접근합니다.
from hrms.main import app as main_app  # noqa: E402
from hrms.core.database import get_session  # noqa: E402
from hrms.core.security import create_access_token  # noqa: E402

# --- 모든 모델 임포트 ---
#  SQLModel.metadata.create_all()이 모든 테이블을 인식하려면 모든 모델이 한 번 이상 임포트되어야 합니다.
from hrms.domains.usr import models as usr_models  # noqa: E402
from hrms.domains.emp import models as emp_models  # noqa: E402
from hrms.domains.att import models as att_models  # noqa: E402, F401
from hrms.domains.pay import models as pay_models  # noqa: E402, F401


# --- 테스트용 데이터베이스 설정 ---
# 테스트마다 새로운 SQLite 메모리 DB를 사용합니다.
# SQLite에는 스키마가 없으므로 'hr' 스키마를 기본 스키마로 치환합니다.
TEST_DATABASE_URL = "sqlite+aiosqlite://"


# --- 데이터베이스 픽스처 ---
@pytest_asyncio.fixture(scope="function")
async def test_engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        execution_options={"schema_translate_map": {"hr": None}},
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """
    각 테스트 함수마다 독립된 비동기 데이터베이스 세션을 제공합니다.
    """
    TestingSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with TestingSessionLocal() as session:
        yield session


# --- 사용자 / 직원 생성 팩토리 ---
@pytest_asyncio.fixture(scope="function")
def user_factory(db_session: AsyncSession) -> Callable[..., Awaitable[usr_models.User]]:
    """
    역할과 속성을 지정하여 테스트 사용자를 생성하는 팩토리 함수를 반환합니다.
    """
    async def _create_user(user_id: str, role: usr_models.UserRole, **kwargs) -> usr_models.User:
        user = usr_models.User(
            user_id=user_id,
            email=f"{user_id}@example.com",
            full_name=kwargs.pop("full_name", user_id),
            role=role,
            **kwargs,
        )
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user
    return _create_user


@pytest_asyncio.fixture(scope="function")
def employee_factory(db_session: AsyncSession) -> Callable[..., Awaitable[emp_models.Employee]]:
    """
    사용자에게 연결된 직원 레코드를 생성하는 팩토리 함수를 반환합니다.
    """
    async def _create_employee(
        employee_id: str,
        user: usr_models.User,
        reporting_manager_id: str = None,
        department_id: int = None,
    ) -> emp_models.Employee:
        employee = emp_models.Employee(
            employee_id=employee_id,
            user_id=user.user_id,
            employee_code=employee_id.upper(),
            first_name=user.user_id,
            last_name="Test",
            reporting_manager_id=reporting_manager_id,
            department_id=department_id,
        )
        db_session.add(employee)
        await db_session.commit()
        await db_session.refresh(employee)
        return employee
    return _create_employee


@pytest_asyncio.fixture(scope="function")
async def test_department(db_session: AsyncSession) -> emp_models.Department:
    """테스트용 부서를 데이터베이스에 생성하고 반환합니다."""
    department = emp_models.Department(code="ENG", name="Engineering")
    db_session.add(department)
    await db_session.commit()
    await db_session.refresh(department)
    return department


@pytest_asyncio.fixture(scope="function")
async def org(
    user_factory: Callable,
    employee_factory: Callable,
    test_department: emp_models.Department,
) -> SimpleNamespace:
    """
    테스트용 조직도를 생성합니다.

        admin       (직원 레코드 없음)
        hr          -> emp-hr
        manager     -> emp-mgr
          employee  -> emp-e1 (manager에게 보고)
          teammate  -> emp-e2 (manager에게 보고)
        outsider    -> emp-e3 (보고 라인 없음)
        noprofile   (employee 역할, 직원 레코드 없음)
    """
    UserRole = usr_models.UserRole
    dept_id = test_department.id

    admin = await user_factory("usr-admin", UserRole.ADMIN)
    hr = await user_factory("usr-hr", UserRole.HR)
    manager = await user_factory("usr-mgr", UserRole.MANAGER)
    employee = await user_factory("usr-e1", UserRole.EMPLOYEE)
    teammate = await user_factory("usr-e2", UserRole.EMPLOYEE)
    outsider = await user_factory("usr-e3", UserRole.EMPLOYEE)
    no_profile = await user_factory("usr-noprofile", UserRole.EMPLOYEE)

    hr_emp = await employee_factory("emp-hr", hr, department_id=dept_id)
    manager_emp = await employee_factory("emp-mgr", manager, department_id=dept_id)
    employee_emp = await employee_factory("emp-e1", employee, reporting_manager_id="emp-mgr", department_id=dept_id)
    teammate_emp = await employee_factory("emp-e2", teammate, reporting_manager_id="emp-mgr", department_id=dept_id)
    outsider_emp = await employee_factory("emp-e3", outsider)

    return SimpleNamespace(
        department=test_department,
        admin=admin,
        hr=hr, hr_emp=hr_emp,
        manager=manager, manager_emp=manager_emp,
        employee=employee, employee_emp=employee_emp,
        teammate=teammate, teammate_emp=teammate_emp,
        outsider=outsider, outsider_emp=outsider_emp,
        no_profile=no_profile,
    )


# --- 클라이언트 픽스처 ---
@pytest_asyncio.fixture(scope="function")
def authorized_client_factory(
    db_session: AsyncSession,
) -> Callable[..., AsyncGenerator[AsyncClient, None]]:
    """
    특정 사용자로 인증된 AsyncClient를 생성하는 팩토리 함수를 반환합니다.
    토큰은 'sub'(user_id)와 'role' 클레임으로 직접 발급합니다.
    """
    @asynccontextmanager
    async def _create_client_context(user: usr_models.User = None) -> AsyncGenerator[AsyncClient, None]:
        async def override_get_session():
            yield db_session

        original_overrides = main_app.dependency_overrides.copy()
        try:
            main_app.dependency_overrides.update({
                get_session: override_get_session,
            })

            transport = ASGITransport(app=main_app)
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                if user is not None:
                    token = create_access_token({"sub": user.user_id, "role": usr_models.UserRole(user.role).value})
                    client.headers["Authorization"] = f"Bearer {token}"
                yield client
        finally:
            main_app.dependency_overrides.clear()
            main_app.dependency_overrides.update(original_overrides)

    return _create_client_context


@pytest_asyncio.fixture(scope="function")
async def client(authorized_client_factory: Callable) -> AsyncGenerator[AsyncClient, None]:
    """인증 헤더가 없는 클라이언트를 반환합니다."""
    async with authorized_client_factory() as c:
        yield c


@pytest_asyncio.fixture(scope="function")
async def admin_client(authorized_client_factory: Callable, org: SimpleNamespace) -> AsyncGenerator[AsyncClient, None]:
    """관리자(admin)로 인증된 클라이언트를 반환합니다."""
    async with authorized_client_factory(org.admin) as c:
        yield c


@pytest_asyncio.fixture(scope="function")
async def hr_client(authorized_client_factory: Callable, org: SimpleNamespace) -> AsyncGenerator[AsyncClient, None]:
    """인사 담당자(hr)로 인증된 클라이언트를 반환합니다."""
    async with authorized_client_factory(org.hr) as c:
        yield c


@pytest_asyncio.fixture(scope="function")
async def manager_client(authorized_client_factory: Callable, org: SimpleNamespace) -> AsyncGenerator[AsyncClient, None]:
    """팀 관리자(manager)로 인증된 클라이언트를 반환합니다."""
    async with authorized_client_factory(org.manager) as c:
        yield c


@pytest_asyncio.fixture(scope="function")
async def employee_client(authorized_client_factory: Callable, org: SimpleNamespace) -> AsyncGenerator[AsyncClient, None]:
    """manager에게 보고하는 일반 직원(emp-e1)으로 인증된 클라이언트를 반환합니다."""
    async with authorized_client_factory(org.employee) as c:
        yield c


@pytest_asyncio.fixture(scope="function")
async def outsider_client(authorized_client_factory: Callable, org: SimpleNamespace) -> AsyncGenerator[AsyncClient, None]:
    """보고 라인이 없는 일반 직원(emp-e3)으로 인증된 클라이언트를 반환합니다."""
    async with authorized_client_factory(org.outsider) as c:
        yield c


@pytest_asyncio.fixture(scope="function")
async def no_profile_client(authorized_client_factory: Callable, org: SimpleNamespace) -> AsyncGenerator[AsyncClient, None]:
    """직원 레코드가 없는 사용자로 인증된 클라이언트를 반환합니다."""
    async with authorized_client_factory(org.no_profile) as c:
        yield c
