# hrms/domains/att/models.py

"""
'att' 도메인 (PostgreSQL 'hr' 스키마)의 데이터베이스 ORM 모델을 정의하는 모듈입니다.
"""

import uuid
from decimal import Decimal
from typing import Optional
from datetime import date, datetime, UTC
from sqlmodel import Field, SQLModel, Column
from sqlalchemy import ForeignKey, String, Numeric
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP


class AttendanceStatus:
    """근태 상태 값 (DB에는 문자열로 저장)"""
    PRESENT = "Present"
    ABSENT = "Absent"
    LATE = "Late"
    HALF_DAY = "Half Day"


# =============================================================================
# hr.attendances 테이블 모델
# =============================================================================
class AttendanceBase(SQLModel):
    """
    hr.attendances 테이블의 기본 속성을 정의하는 SQLModel Base 클래스입니다.
    """
    attendance_id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        primary_key=True,
        max_length=36,
        description="근태 기록 고유 ID"
    )
    employee_id: str = Field(
        sa_column=Column(
            String(36),
            ForeignKey("hr.employees.employee_id", onupdate="CASCADE", ondelete="CASCADE"),
            index=True,
            nullable=False,
        ),
        description="직원 ID (FK)"
    )
    attendance_date: date = Field(description="근무일")
    check_in_time: Optional[datetime] = Field(
        default=None,
        sa_column=Column(TIMESTAMP(timezone=True), nullable=True),
        description="출근 시각"
    )
    check_out_time: Optional[datetime] = Field(
        default=None,
        sa_column=Column(TIMESTAMP(timezone=True), nullable=True),
        description="퇴근 시각"
    )
    status: str = Field(default=AttendanceStatus.PRESENT, max_length=20, description="근태 상태")
    total_hour: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(5, 2), nullable=True),
        description="총 근무 시간"
    )

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


class Attendance(AttendanceBase, table=True):
    """
    PostgreSQL의 hr.attendances 테이블에 매핑되는 SQLModel ORM 클래스입니다.
    """
    __tablename__ = "attendances"
    __table_args__ = {'schema': 'hr'}
