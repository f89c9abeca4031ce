# hrms/domains/usr/routers.py

"""
'usr' 도메인 (사용자 관리)과 관련된 API 엔드포인트를 정의하는 모듈입니다.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlmodel.ext.asyncio.session import AsyncSession

from hrms.core.database import get_session
from hrms.core import dependencies as deps
from hrms.core.access_policy import FilterDecision, FilterStrategy, Identity
from hrms.core.access_helpers import describe_decision
from hrms.core.crud_base import NO_ROW_FILTER

from . import crud as usr_crud
from . import models as usr_models
from . import schemas as usr_schemas


router = APIRouter(
    tags=["User Management (사용자 관리)"],
    responses={404: {"description": "Not found"}},
)


@router.get("/auth/me", response_model=usr_schemas.CurrentUserAccess, summary="현재 사용자 및 접근 범위 조회")
async def read_current_access(
    identity: Identity = Depends(deps.get_current_identity),
    decision: FilterDecision = Depends(deps.row_filter(FilterStrategy.EMPLOYEE_DATA)),
):
    """
    토큰의 사용자 정보와 'employee-data' 전략 기준으로 조회 가능한 직원 범위를 반환합니다.
    """
    return usr_schemas.CurrentUserAccess(
        user_id=identity.user_id,
        role=identity.role,
        current_employee_id=decision.current_employee_id,
        unrestricted=decision.is_unrestricted,
        allowed_employee_ids=sorted(decision.allowed_employee_ids or []),
        summary=describe_decision(decision),
    )


@router.post("/users", response_model=usr_schemas.UserRead, status_code=status.HTTP_201_CREATED, summary="새 사용자 생성")
async def create_user(
    user: usr_schemas.UserCreate,
    db: AsyncSession = Depends(get_session),
    _=Depends(deps.require_roles(usr_models.UserRole.ADMIN)),
):
    return await usr_crud.user.create(db, obj_in=user)


@router.get("/users", response_model=List[usr_schemas.UserRead], summary="모든 사용자 조회 (HR/Admin)")
async def read_users(
    db: AsyncSession = Depends(get_session),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1),
    _=Depends(deps.require_roles(usr_models.UserRole.HR, usr_models.UserRole.ADMIN)),
):
    return await usr_crud.user.get_filtered(
        db, access=NO_ROW_FILTER, order_by_field="email", order_desc=False, skip=skip, limit=limit
    )


@router.put("/users/{user_id}", response_model=usr_schemas.UserRead, summary="사용자 정보 업데이트 (Admin)")
async def update_user(
    user_id: str,
    user_in: usr_schemas.UserUpdate,
    db: AsyncSession = Depends(get_session),
    _=Depends(deps.require_roles(usr_models.UserRole.ADMIN)),
):
    db_user = await usr_crud.user.get(db, user_id)
    if not db_user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return await usr_crud.user.update(db, db_obj=db_user, obj_in=user_in)
