# hrms/domains/att/routers.py

"""
'att' 도메인 (근태 관리)과 관련된 API 엔드포인트를 정의하는 모듈입니다.

- 목록/상세 조회: 'team-viewable' (직원은 본인, 관리자는 본인+팀, HR/Admin은 전체)
- 출근/퇴근: 'self-only' (누구나 본인 기록만 생성)
- 상태별 요약: 'hr-admin-only'
"""

from typing import List, Optional
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlmodel.ext.asyncio.session import AsyncSession

from hrms.core.database import get_session
from hrms.core import dependencies as deps
from hrms.core.access_policy import FilterDecision, FilterStrategy
from hrms.core.access_helpers import has_access, can_access_employee, current_employee_id
from hrms.domains.usr.models import UserRole

from . import crud as att_crud
from . import schemas as att_schemas


router = APIRouter(
    tags=["Attendance Management (근태 관리)"],
    responses={404: {"description": "Not found"}},
)


@router.get("/attendances", response_model=List[att_schemas.AttendanceRead], summary="근태 기록 목록 조회")
async def read_attendances(
    db: AsyncSession = Depends(get_session),
    employee_id: Optional[str] = Query(None),
    attendance_status: Optional[str] = Query(None, alias="status"),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    decision: FilterDecision = Depends(deps.row_filter(FilterStrategy.TEAM_VIEWABLE)),
):
    """
    호출자가 볼 수 있는 범위의 근태 기록을 최신 근무일 순으로 조회합니다.
    """
    if not has_access(decision):
        return []
    return await att_crud.attendance.get_filtered(
        db,
        access=decision,
        filters={"employee_id": employee_id, "status": attendance_status},
        date_range_field="attendance_date",
        start_date=start_date,
        end_date=end_date,
        order_by_field="attendance_date",
        order_desc=True,
        skip=skip,
        limit=limit,
    )


@router.get("/attendances/summary", response_model=att_schemas.AttendanceSummary, summary="근태 상태별 요약 (HR/Admin)")
async def read_attendance_summary(
    db: AsyncSession = Depends(get_session),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    decision: FilterDecision = Depends(deps.row_filter(FilterStrategy.HR_ADMIN_ONLY)),
):
    if not has_access(decision):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have permission to view the attendance summary"
        )
    return await att_crud.attendance.summarize(db, access=decision, start_date=start_date, end_date=end_date)


@router.post("/attendances/check-in", response_model=att_schemas.AttendanceRead, status_code=status.HTTP_201_CREATED, summary="출근 기록")
async def check_in(
    db: AsyncSession = Depends(get_session),
    decision: FilterDecision = Depends(deps.row_filter(FilterStrategy.SELF_ONLY)),
):
    employee_id = current_employee_id(decision)
    if employee_id is None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Employee profile not found for current user")
    return await att_crud.attendance.check_in(db, employee_id=employee_id)


@router.post("/attendances/check-out", response_model=att_schemas.AttendanceRead, summary="퇴근 기록")
async def check_out(
    db: AsyncSession = Depends(get_session),
    decision: FilterDecision = Depends(deps.row_filter(FilterStrategy.SELF_ONLY)),
):
    employee_id = current_employee_id(decision)
    if employee_id is None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Employee profile not found for current user")
    return await att_crud.attendance.check_out(db, employee_id=employee_id)


@router.get("/attendances/{attendance_id}", response_model=att_schemas.AttendanceRead, summary="특정 근태 기록 조회")
async def read_attendance(
    attendance_id: str,
    db: AsyncSession = Depends(get_session),
    decision: FilterDecision = Depends(deps.row_filter(FilterStrategy.TEAM_VIEWABLE)),
):
    if not has_access(decision):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have permission to view this attendance record"
        )
    record = await att_crud.attendance.get_visible(db, attendance_id, access=decision)
    if not record:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Attendance not found")
    return record


@router.put("/attendances/{attendance_id}", response_model=att_schemas.AttendanceRead, summary="근태 기록 수정")
async def update_attendance(
    attendance_id: str,
    attendance_in: att_schemas.AttendanceUpdate,
    db: AsyncSession = Depends(get_session),
    decision: FilterDecision = Depends(deps.row_filter(FilterStrategy.TEAM_VIEWABLE)),
    _=Depends(deps.require_roles(UserRole.MANAGER, UserRole.HR, UserRole.ADMIN)),
):
    """
    근태 기록을 수정합니다. 관리자는 자기 팀의 기록만 수정할 수 있습니다.
    """
    record = await att_crud.attendance.get(db, attendance_id)
    if not record:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Attendance not found")
    if not can_access_employee(decision, record.employee_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have permission to modify this attendance record"
        )
    return await att_crud.attendance.update(db, db_obj=record, obj_in=attendance_in)


@router.delete("/attendances/{attendance_id}", status_code=status.HTTP_204_NO_CONTENT, summary="근태 기록 삭제")
async def delete_attendance(
    attendance_id: str,
    db: AsyncSession = Depends(get_session),
    _=Depends(deps.require_roles(UserRole.ADMIN)),
):
    deleted = await att_crud.attendance.delete(db, id=attendance_id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Attendance not found")
    return None
