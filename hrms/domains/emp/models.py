# hrms/domains/emp/models.py

"""
'emp' 도메인 (PostgreSQL 'hr' 스키마)의 데이터베이스 ORM 모델을 정의하는 모듈입니다.

이 모듈은 부서(departments)와 직원(employees) 테이블에 대한 SQLModel 클래스를 포함합니다.
직원 레코드는 `reporting_manager_id`로 같은 테이블의 다른 직원을 참조하여 보고 라인을 구성합니다.
"""

import uuid
from typing import Optional, List
from datetime import date, datetime, UTC
from sqlmodel import Field, Relationship, SQLModel, Column
from sqlalchemy import ForeignKey, String, Integer
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP


# =============================================================================
# 1. hr.departments 테이블 모델
# =============================================================================
class DepartmentBase(SQLModel):
    """
    hr.departments 테이블의 기본 속성을 정의하는 SQLModel Base 클래스입니다.
    """
    id: Optional[int] = Field(default=None, primary_key=True, description="부서 고유 ID")
    code: str = Field(max_length=10, sa_column_kwargs={"unique": True}, description="부서 코드 (예: HR, ENG)")
    name: str = Field(max_length=100, sa_column_kwargs={"unique": True}, description="부서명")
    notes: Optional[str] = Field(default=None, description="비고")

    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now()),
        description="레코드 생성 일시"
    )
    updated_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()),
        description="레코드 마지막 업데이트 일시"
    )


class Department(DepartmentBase, table=True):
    """
    PostgreSQL의 hr.departments 테이블에 매핑되는 SQLModel ORM 클래스입니다.
    """
    __tablename__ = "departments"
    __table_args__ = {'schema': 'hr'}

    employees: List["Employee"] = Relationship(back_populates="department")


# =============================================================================
# 2. hr.employees 테이블 모델
# =============================================================================
class EmployeeBase(SQLModel):
    """
    hr.employees 테이블의 기본 속성을 정의하는 SQLModel Base 클래스입니다.
    """
    employee_id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        primary_key=True,
        max_length=36,
        description="직원 고유 ID"
    )
    user_id: str = Field(
        sa_column=Column(
            String(36),
            ForeignKey("hr.users.user_id", onupdate="CASCADE", ondelete="RESTRICT"),
            unique=True,
            nullable=False,
        ),
        description="직원 레코드를 소유한 사용자 ID (FK)"
    )
    employee_code: str = Field(max_length=20, sa_column_kwargs={"unique": True}, description="사번")
    first_name: str = Field(max_length=50, description="이름")
    last_name: str = Field(max_length=50, description="성")
    department_id: Optional[int] = Field(
        default=None,
        sa_column=Column(
            Integer,
            ForeignKey("hr.departments.id", onupdate="CASCADE", ondelete="RESTRICT")
        ),
        description="소속 부서 ID (FK)"
    )
    reporting_manager_id: Optional[str] = Field(
        default=None,
        sa_column=Column(
            String(36),
            ForeignKey("hr.employees.employee_id", onupdate="CASCADE", ondelete="SET NULL"),
            index=True,
            nullable=True,
        ),
        description="직속 상관(관리자)의 직원 ID (FK, 자기 참조)"
    )
    employment_start_date: Optional[date] = Field(default=None, description="입사일")
    status: str = Field(default="active", max_length=20, description="재직 상태 (active, on_leave, terminated)")

    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now()),
        description="레코드 생성 일시"
    )
    updated_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()),
        description="레코드 마지막 업데이트 일시"
    )


class Employee(EmployeeBase, table=True):
    """
    PostgreSQL의 hr.employees 테이블에 매핑되는 SQLModel ORM 클래스입니다.
    """
    __tablename__ = "employees"
    __table_args__ = {'schema': 'hr'}

    department: Optional["Department"] = Relationship(
        back_populates="employees",
        sa_relationship_kwargs={"foreign_keys": "Employee.department_id"}
    )
