# hrms/domains/emp/schemas.py

"""
'emp' 도메인 (부서 및 직원 관리)의 API 데이터 전송 객체(DTO)를 정의하는 모듈입니다.
"""

from typing import Optional
from datetime import date, datetime
from sqlmodel import SQLModel, Field


# =============================================================================
# 1. 부서 (Department) 스키마
# =============================================================================
class DepartmentBase(SQLModel):
    code: str = Field(..., max_length=10)
    name: str = Field(..., max_length=100)
    notes: Optional[str] = None


class DepartmentCreate(DepartmentBase):
    pass


class DepartmentUpdate(SQLModel):
    code: Optional[str] = Field(None, max_length=10)
    name: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None


class DepartmentRead(DepartmentBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# =============================================================================
# 2. 직원 (Employee) 스키마
# =============================================================================
class EmployeeBase(SQLModel):
    """직원 정보의 기본 필드를 정의하는 스키마"""
    user_id: str = Field(..., max_length=36)
    employee_code: str = Field(..., max_length=20)
    first_name: str = Field(..., max_length=50)
    last_name: str = Field(..., max_length=50)
    department_id: Optional[int] = None
    reporting_manager_id: Optional[str] = Field(None, max_length=36)
    employment_start_date: Optional[date] = None
    status: str = Field(default="active", max_length=20)


class EmployeeCreate(EmployeeBase):
    """직원 생성을 위한 스키마 (employee_id는 지정하지 않으면 자동 생성)"""
    employee_id: Optional[str] = Field(None, max_length=36)


class EmployeeUpdate(SQLModel):
    """직원 정보 업데이트를 위한 스키마 (모든 필드는 선택 사항)"""
    employee_code: Optional[str] = Field(None, max_length=20)
    first_name: Optional[str] = Field(None, max_length=50)
    last_name: Optional[str] = Field(None, max_length=50)
    department_id: Optional[int] = None
    reporting_manager_id: Optional[str] = Field(None, max_length=36)
    employment_start_date: Optional[date] = None
    status: Optional[str] = Field(None, max_length=20)


class EmployeeRead(EmployeeBase):
    """직원 정보 조회를 위한 스키마"""
    employee_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
