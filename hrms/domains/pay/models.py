# hrms/domains/pay/models.py

"""
'pay' 도메인 (PostgreSQL 'hr' 스키마)의 데이터베이스 ORM 모델을 정의하는 모듈입니다.
"""

import uuid
from decimal import Decimal
from typing import Optional
from datetime import date, datetime, UTC
from sqlmodel import Field, SQLModel, Column
from sqlalchemy import ForeignKey, String, Numeric
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP


# =============================================================================
# hr.payslips 테이블 모델
# =============================================================================
class PayslipBase(SQLModel):
    """
    hr.payslips 테이블의 기본 속성을 정의하는 SQLModel Base 클래스입니다.
    """
    payslip_id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        primary_key=True,
        max_length=36,
        description="급여 명세서 고유 ID"
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
    pay_period_start: date = Field(description="급여 기간 시작일")
    pay_period_end: date = Field(description="급여 기간 종료일")
    gross_salary: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False), description="총 급여")
    deductions_amount: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="공제 총액"
    )
    allowances_amount: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="수당 총액"
    )
    net_salary: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False), description="실 지급액")
    pdf_url: Optional[str] = Field(default=None, max_length=255, description="명세서 PDF 경로")
    generated_by: Optional[str] = Field(
        default=None,
        sa_column=Column(String(36), ForeignKey("hr.users.user_id", ondelete="SET NULL"), nullable=True),
        description="명세서를 생성한 사용자 ID (FK)"
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


class Payslip(PayslipBase, table=True):
    """
    PostgreSQL의 hr.payslips 테이블에 매핑되는 SQLModel ORM 클래스입니다.
    """
    __tablename__ = "payslips"
    __table_args__ = {'schema': 'hr'}
