# hrms/domains/pay/schemas.py

"""
'pay' 도메인 (급여 명세서)의 API 데이터 전송 객체(DTO)를 정의하는 모듈입니다.
"""

from decimal import Decimal
from typing import Optional
from datetime import date, datetime
from pydantic import model_validator
from sqlmodel import SQLModel, Field


class PayslipBase(SQLModel):
    employee_id: str = Field(..., max_length=36)
    pay_period_start: date
    pay_period_end: date
    gross_salary: Decimal = Field(..., ge=0)
    deductions_amount: Decimal = Field(default=Decimal("0"), ge=0)
    allowances_amount: Decimal = Field(default=Decimal("0"), ge=0)
    pdf_url: Optional[str] = Field(None, max_length=255)


class PayslipCreate(PayslipBase):
    """급여 명세서 생성 스키마. net_salary를 생략하면 총급여 + 수당 - 공제로 계산합니다."""
    net_salary: Optional[Decimal] = None

    @model_validator(mode="after")
    def check_period(self):
        if self.pay_period_end < self.pay_period_start:
            raise ValueError("pay_period_end must not be before pay_period_start")
        return self


class PayslipUpdate(SQLModel):
    """명세서는 생성 후 수정하지 않으므로 업데이트 스키마는 비어 있습니다."""


class PayslipRead(PayslipBase):
    payslip_id: str
    net_salary: Decimal
    generated_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
