# hrms/domains/pay/crud.py

"""
'pay' 도메인의 CRUD 작업을 담당하는 모듈입니다.
"""

from typing import Optional

from sqlmodel.ext.asyncio.session import AsyncSession
from fastapi import HTTPException, status

from hrms.core.crud_base import CRUDBase
from hrms.domains.emp import crud as emp_crud
from . import models as pay_models
from . import schemas as pay_schemas


class CRUDPayslip(CRUDBase[pay_models.Payslip, pay_schemas.PayslipCreate, pay_schemas.PayslipUpdate]):
    def __init__(self):
        super().__init__(model=pay_models.Payslip, access_column="employee_id")

    async def create(
        self, db: AsyncSession, *, obj_in: pay_schemas.PayslipCreate, generated_by: Optional[str] = None
    ) -> pay_models.Payslip:
        """급여 명세서를 생성합니다. 대상 직원이 없으면 400을 반환합니다."""
        if not await emp_crud.employee.get(db, obj_in.employee_id):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Employee not found")

        payslip_data = obj_in.model_dump()
        if payslip_data.get("net_salary") is None:
            payslip_data["net_salary"] = (
                obj_in.gross_salary + obj_in.allowances_amount - obj_in.deductions_amount
            )
        db_obj = pay_models.Payslip(**payslip_data, generated_by=generated_by)
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj


payslip = CRUDPayslip()
