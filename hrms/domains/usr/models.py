# hrms/domains/usr/models.py

"""
'usr' 도메인 (PostgreSQL 'hr' 스키마)의 데이터베이스 ORM 모델을 정의하는 모듈입니다.
"""

import uuid
from enum import Enum
from typing import Optional
from datetime import datetime, UTC
from sqlmodel import Field, SQLModel, Column
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP


# =============================================================================
# 사용자 역할(RBAC)
# =============================================================================
class UserRole(str, Enum):
    """
    사용자 역할을 정의하는 문자열 Enum 클래스입니다.
    JWT의 'role' 클레임과 DB에는 문자열 값('employee', 'manager', 'hr', 'admin')으로 저장됩니다.
    """
    EMPLOYEE = "employee"   # 일반 직원
    MANAGER = "manager"     # 팀 관리자 (직속 부하직원 조회 가능)
    HR = "hr"               # 인사 담당자
    ADMIN = "admin"         # 시스템 관리자


# =============================================================================
# hr.users 테이블 모델
# =============================================================================
class UserBase(SQLModel):
    """
    hr.users 테이블의 기본 속성을 정의하는 SQLModel Base 클래스입니다.
    """
    user_id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        primary_key=True,
        max_length=36,
        description="사용자 고유 ID (JWT 'sub' 클레임)"
    )
    email: str = Field(max_length=100, sa_column_kwargs={"unique": True}, description="사용자 이메일 (로그인 ID)")
    full_name: Optional[str] = Field(default=None, max_length=100, description="사용자 전체 이름")
    role: UserRole = Field(default=UserRole.EMPLOYEE, description="사용자 역할 (권한)")
    is_active: bool = Field(default=True, description="계정 활성 여부")

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


class User(UserBase, table=True):
    """
    PostgreSQL의 hr.users 테이블에 매핑되는 SQLModel ORM 클래스입니다.
    """
    __tablename__ = "users"
    __table_args__ = {'schema': 'hr'}
