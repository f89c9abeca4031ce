# hrms/domains/usr/schemas.py

"""
'usr' 도메인 (사용자 관리)의 API 데이터 전송 객체(DTO)를 정의하는 모듈입니다.
"""

from typing import Optional, List
from datetime import datetime
from sqlmodel import SQLModel, Field

from . import models as usr_models


class UserBase(SQLModel):
    """사용자 정보의 기본 필드를 정의하는 스키마"""
    email: str = Field(..., max_length=100)
    full_name: Optional[str] = Field(None, max_length=100)
    role: usr_models.UserRole = Field(default=usr_models.UserRole.EMPLOYEE, description="사용자 역할")
    is_active: bool = True


class UserCreate(UserBase):
    """사용자 생성을 위한 스키마 (user_id는 지정하지 않으면 자동 생성)"""
    user_id: Optional[str] = Field(None, max_length=36)


class UserRead(UserBase):
    """사용자 정보 조회를 위한 스키마"""
    user_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserUpdate(SQLModel):
    full_name: Optional[str] = Field(None, max_length=100)
    role: Optional[usr_models.UserRole] = None
    is_active: Optional[bool] = None


class CurrentUserAccess(SQLModel):
    """현재 호출자의 인증 정보와 'employee-data' 기준 접근 범위 요약"""
    user_id: str
    role: str
    current_employee_id: Optional[str] = None
    unrestricted: bool
    allowed_employee_ids: List[str] = Field(default_factory=list)
    summary: str
