# hrms/domains/emp/routers.py

"""
'emp' 도메인 (부서 및 직원 관리)과 관련된 API 엔드포인트를 정의하는 모듈입니다.

직원 조회 엔드포인트는 'employee-data' 전략으로 행 단위 필터가 적용됩니다.
- 직원: 본인 레코드만
- 관리자: 본인 + 직속 부하직원
- HR/Admin: 전체
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlmodel.ext.asyncio.session import AsyncSession

from hrms.core.database import get_session
from hrms.core import dependencies as deps
from hrms.core.access_policy import FilterDecision, FilterStrategy
from hrms.core.access_helpers import can_access_employee, current_employee_id
from hrms.domains.usr.models import UserRole

from . import crud as emp_crud
from . import schemas as emp_schemas


router = APIRouter(
    tags=["Employee & Department Management (직원 및 부서 관리)"],
    responses={404: {"description": "Not found"}},
)

hr_or_admin = deps.require_roles(UserRole.HR, UserRole.ADMIN)


# =============================================================================
# 1. 부서 (Department) 관리 엔드포인트
# =============================================================================
@router.post("/departments", response_model=emp_schemas.DepartmentRead, status_code=status.HTTP_201_CREATED, summary="새 부서 생성")
async def create_department(
    department: emp_schemas.DepartmentCreate,
    db: AsyncSession = Depends(get_session),
    _=Depends(hr_or_admin),
):
    return await emp_crud.department.create(db, obj_in=department)


@router.get("/departments", response_model=List[emp_schemas.DepartmentRead], summary="모든 부서 조회")
async def read_departments(
    db: AsyncSession = Depends(get_session),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1),
    _=Depends(deps.get_current_identity),
):
    return await emp_crud.department.get_multi(db, skip=skip, limit=limit)


@router.put("/departments/{department_id}", response_model=emp_schemas.DepartmentRead, summary="부서 업데이트")
async def update_department(
    department_id: int,
    department_in: emp_schemas.DepartmentUpdate,
    db: AsyncSession = Depends(get_session),
    _=Depends(hr_or_admin),
):
    db_department = await emp_crud.department.get(db, id=department_id)
    if not db_department:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Department not found")

    if department_in.code and department_in.code != db_department.code:
        if await emp_crud.department.get_by_code(db, code=department_in.code):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Department with this code already exists")
    if department_in.name and department_in.name != db_department.name:
        if await emp_crud.department.get_by_name(db, name=department_in.name):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Department with this name already exists")

    return await emp_crud.department.update(db, db_obj=db_department, obj_in=department_in)


@router.delete("/departments/{department_id}", status_code=status.HTTP_204_NO_CONTENT, summary="부서 삭제")
async def delete_department(
    department_id: int,
    db: AsyncSession = Depends(get_session),
    _=Depends(deps.require_roles(UserRole.ADMIN)),
):
    await emp_crud.department.remove(db, id=department_id)
    return None


# =============================================================================
# 2. 직원 (Employee) 관리 엔드포인트
# =============================================================================
@router.get("/employees", response_model=List[emp_schemas.EmployeeRead], summary="직원 목록 조회 (역할별 범위)")
async def read_employees(
    db: AsyncSession = Depends(get_session),
    department_id: Optional[int] = Query(None),
    employee_status: Optional[str] = Query(None, alias="status"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    decision: FilterDecision = Depends(deps.row_filter(FilterStrategy.EMPLOYEE_DATA)),
):
    """
    호출자가 볼 수 있는 직원 목록을 조회합니다.
    접근 범위가 없으면 빈 목록을 반환합니다.
    """
    return await emp_crud.employee.get_filtered(
        db,
        access=decision,
        filters={"department_id": department_id, "status": employee_status},
        order_by_field="employee_code",
        order_desc=False,
        skip=skip,
        limit=limit,
    )


@router.get("/employees/me", response_model=emp_schemas.EmployeeRead, summary="내 직원 정보 조회")
async def read_my_employee_profile(
    db: AsyncSession = Depends(get_session),
    decision: FilterDecision = Depends(deps.row_filter(FilterStrategy.SELF_ONLY)),
):
    """
    호출자 본인의 직원 레코드를 조회합니다. HR/Admin도 본인 레코드만 반환됩니다.
    """
    employee_id = current_employee_id(decision)
    if employee_id is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Employee profile not found")
    employee = await emp_crud.employee.get_visible(db, employee_id, access=decision)
    if not employee:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Employee profile not found")
    return employee


@router.get("/employees/{employee_id}", response_model=emp_schemas.EmployeeRead, summary="특정 직원 조회")
async def read_employee(
    employee_id: str,
    db: AsyncSession = Depends(get_session),
    decision: FilterDecision = Depends(deps.row_filter(FilterStrategy.EMPLOYEE_DATA)),
):
    employee = await emp_crud.employee.get(db, employee_id)
    if not employee:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Employee not found")
    if not can_access_employee(decision, employee.employee_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have permission to view this employee"
        )
    return employee


@router.get("/employees/{employee_id}/team", response_model=List[emp_schemas.EmployeeRead], summary="직속 팀원 조회")
async def read_employee_team(
    employee_id: str,
    db: AsyncSession = Depends(get_session),
    decision: FilterDecision = Depends(deps.row_filter(FilterStrategy.TEAM_VIEWABLE)),
):
    """
    지정한 직원의 직속 부하직원 목록을 조회합니다.
    관리자는 자신의 팀을, HR/Admin은 모든 팀을 조회할 수 있습니다.
    """
    if not can_access_employee(decision, employee_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have permission to view this team"
        )
    return await emp_crud.employee.get_team(db, manager_id=employee_id, access=decision)


@router.post("/employees", response_model=emp_schemas.EmployeeRead, status_code=status.HTTP_201_CREATED, summary="새 직원 생성")
async def create_employee(
    employee: emp_schemas.EmployeeCreate,
    db: AsyncSession = Depends(get_session),
    _=Depends(hr_or_admin),
):
    return await emp_crud.employee.create(db, obj_in=employee)


@router.put("/employees/{employee_id}", response_model=emp_schemas.EmployeeRead, summary="직원 정보 업데이트")
async def update_employee(
    employee_id: str,
    employee_in: emp_schemas.EmployeeUpdate,
    db: AsyncSession = Depends(get_session),
    _=Depends(hr_or_admin),
):
    db_employee = await emp_crud.employee.get(db, employee_id)
    if not db_employee:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Employee not found")
    return await emp_crud.employee.update(db, db_obj=db_employee, obj_in=employee_in)


@router.delete("/employees/{employee_id}", status_code=status.HTTP_204_NO_CONTENT, summary="직원 삭제")
async def delete_employee(
    employee_id: str,
    db: AsyncSession = Depends(get_session),
    _=Depends(deps.require_roles(UserRole.ADMIN)),
):
    await emp_crud.employee.remove(db, employee_id=employee_id)
    return None
