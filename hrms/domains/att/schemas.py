# hrms/domains/att/schemas.py

"""
'att' 도메인 (근태 관리)의 API 데이터 전송 객체(DTO)를 정의하는 모듈입니다.
"""

from decimal import Decimal
from typing import Optional, Dict
from datetime import date, datetime
from sqlmodel import SQLModel, Field


class AttendanceBase(SQLModel):
    employee_id: str = Field(..., max_length=36)
    attendance_date: date
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    status: str = Field(default="Present", max_length=20)
    total_hour: Optional[Decimal] = None


class AttendanceCreate(AttendanceBase):
    pass


class AttendanceUpdate(SQLModel):
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    status: Optional[str] = Field(None, max_length=20)
    total_hour: Optional[Decimal] = None


class AttendanceRead(AttendanceBase):
    attendance_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AttendanceSummary(SQLModel):
    """기간 내 근태 상태별 건수 요약"""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    total: int = 0
    by_status: Dict[str, int] = Field(default_factory=dict)
