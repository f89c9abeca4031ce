# hrms/domains/pay/routers.py

"""
'pay' 도메인 (급여 명세서)과 관련된 API 엔드포인트를 정의하는 모듈입니다.

급여 명세서는 민감한 재무 정보이므로 'sensitive-financial' 전략을 사용합니다.
직원은 본인 명세서만, HR/Admin은 전체를 조회할 수 있으며 관리자는 팀원 명세서도 볼 수 없습니다.
"""

from typing import List, Optional
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlmodel.ext.asyncio.session import AsyncSession

from hrms.core.database import get_session
from hrms.core import dependencies as deps
from hrms.core.access_policy import FilterDecision, FilterStrategy, Identity
from hrms.core.access_helpers import has_access
from hrms.domains.usr.models import UserRole

from . import crud as pay_crud
from . import schemas as pay_schemas


router = APIRouter(
    tags=["Payroll Management (급여 관리)"],
    responses={404: {"description": "Not found"}},
)


@router.get("/payslips", response_model=List[pay_schemas.PayslipRead], summary="급여 명세서 목록 조회")
async def read_payslips(
    db: AsyncSession = Depends(get_session),
    employee_id: Optional[str] = Query(None),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    skip: int = Query(0, ge=0),
    limit: int = Query(10, ge=1, le=1000),
    decision: FilterDecision = Depends(deps.row_filter(FilterStrategy.SENSITIVE_FINANCIAL)),
):
    # 접근 범위가 없으면 쿼리 없이 빈 목록 반환
    if not has_access(decision):
        return []
    return await pay_crud.payslip.get_filtered(
        db,
        access=decision,
        filters={"employee_id": employee_id},
        date_range_field="pay_period_start",
        start_date=start_date,
        end_date=end_date,
        order_by_field="pay_period_start",
        order_desc=True,
        skip=skip,
        limit=limit,
    )


@router.get("/payslips/{payslip_id}", response_model=pay_schemas.PayslipRead, summary="특정 급여 명세서 조회")
async def read_payslip(
    payslip_id: str,
    db: AsyncSession = Depends(get_session),
    decision: FilterDecision = Depends(deps.row_filter(FilterStrategy.SENSITIVE_FINANCIAL)),
):
    if not has_access(decision):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have permission to view this payslip"
        )
    payslip = await pay_crud.payslip.get_visible(db, payslip_id, access=decision)
    if not payslip:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Payslip not found")
    return payslip


@router.post("/payslips", response_model=pay_schemas.PayslipRead, status_code=status.HTTP_201_CREATED, summary="급여 명세서 생성")
async def create_payslip(
    payslip_in: pay_schemas.PayslipCreate,
    db: AsyncSession = Depends(get_session),
    identity: Identity = Depends(deps.require_roles(UserRole.HR, UserRole.ADMIN)),
):
    return await pay_crud.payslip.create(db, obj_in=payslip_in, generated_by=identity.user_id)


@router.delete("/payslips/{payslip_id}", status_code=status.HTTP_204_NO_CONTENT, summary="급여 명세서 삭제")
async def delete_payslip(
    payslip_id: str,
    db: AsyncSession = Depends(get_session),
    _=Depends(deps.require_roles(UserRole.ADMIN)),
):
    deleted = await pay_crud.payslip.delete(db, id=payslip_id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Payslip not found")
    return None
