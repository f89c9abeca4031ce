# hrms/domains/emp/crud.py

"""
'emp' 도메인의 CRUD 작업을 담당하는 모듈입니다.

행 단위 접근 정책이 사용하는 직원 디렉터리(`SqlEmployeeDirectory`)도 이 모듈에서 제공합니다.
"""

from typing import List, Optional
from sqlalchemy.engine import Row
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from fastapi import HTTPException, status

from hrms.core.crud_base import CRUDBase
from hrms.core.access_policy import FilterDecision
from . import models as emp_models
from . import schemas as emp_schemas


# =============================================================================
# 1. hr.departments 테이블 CRUD
# =============================================================================
class CRUDDepartment(CRUDBase[emp_models.Department, emp_schemas.DepartmentCreate, emp_schemas.DepartmentUpdate]):
    def __init__(self):
        super().__init__(model=emp_models.Department)

    async def get_by_code(self, db: AsyncSession, *, code: str) -> Optional[emp_models.Department]:
        return await self.get_by_attribute(db, attribute="code", value=code)

    async def get_by_name(self, db: AsyncSession, *, name: str) -> Optional[emp_models.Department]:
        return await self.get_by_attribute(db, attribute="name", value=name)

    async def create(self, db: AsyncSession, *, obj_in: emp_schemas.DepartmentCreate) -> emp_models.Department:
        if await self.get_by_code(db, code=obj_in.code):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Department with this code already exists")
        if await self.get_by_name(db, name=obj_in.name):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Department with this name already exists")
        return await super().create(db, obj_in=obj_in)

    async def remove(self, db: AsyncSession, *, id: int) -> emp_models.Department:
        """
        부서를 삭제합니다. 소속 직원이 있다면 삭제를 거부합니다.
        """
        department_to_delete = await self.get(db, id=id)
        if not department_to_delete:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Department not found")

        statement = select(emp_models.Employee.employee_id).where(emp_models.Employee.department_id == id).limit(1)
        result = await db.execute(statement)
        if result.first() is not None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cannot delete department: associated employees exist. "
                       "Please reassign or delete associated employees first."
            )

        return await super().delete(db, id=id)


department = CRUDDepartment()


# =============================================================================
# 2. hr.employees 테이블 CRUD
# =============================================================================
class CRUDEmployee(CRUDBase[emp_models.Employee, emp_schemas.EmployeeCreate, emp_schemas.EmployeeUpdate]):
    def __init__(self):
        super().__init__(model=emp_models.Employee, access_column="employee_id")

    async def get_by_user_id(self, db: AsyncSession, *, user_id: str) -> Optional[emp_models.Employee]:
        """사용자 ID로 직원 레코드를 조회합니다."""
        return await self.get_by_attribute(db, attribute="user_id", value=user_id)

    async def get_by_code(self, db: AsyncSession, *, employee_code: str) -> Optional[emp_models.Employee]:
        return await self.get_by_attribute(db, attribute="employee_code", value=employee_code)

    async def get_team(
        self, db: AsyncSession, *, manager_id: str, access: Optional[FilterDecision]
    ) -> List[emp_models.Employee]:
        """지정한 관리자의 직속 부하직원 중 호출자가 볼 수 있는 직원만 조회합니다."""
        return await self.get_filtered(
            db,
            access=access,
            filters={"reporting_manager_id": manager_id},
            order_by_field="employee_code",
            order_desc=False,
            limit=1000,
        )

    async def create(self, db: AsyncSession, *, obj_in: emp_schemas.EmployeeCreate) -> emp_models.Employee:
        """새 직원을 생성하며 사용자/사번 중복과 관리자 존재 여부를 검사합니다."""
        if await self.get_by_user_id(db, user_id=obj_in.user_id):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User already has an employee profile")
        if await self.get_by_code(db, employee_code=obj_in.employee_code):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Employee code already exists")
        if obj_in.reporting_manager_id and not await self.get(db, obj_in.reporting_manager_id):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Reporting manager not found")

        employee_data = obj_in.model_dump(exclude_none=True)
        db_employee = emp_models.Employee(**employee_data)
        db.add(db_employee)
        await db.commit()
        await db.refresh(db_employee)
        return db_employee

    async def update(
        self, db: AsyncSession, *, db_obj: emp_models.Employee, obj_in: emp_schemas.EmployeeUpdate
    ) -> emp_models.Employee:
        """
        직원 정보를 업데이트합니다. 자기 자신을 관리자로 지정하는 것을 방지합니다.
        """
        if obj_in.reporting_manager_id is not None:
            if obj_in.reporting_manager_id == db_obj.employee_id:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Employee cannot report to themselves")
            if not await self.get(db, obj_in.reporting_manager_id):
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Reporting manager not found")
        return await super().update(db, db_obj=db_obj, obj_in=obj_in)

    async def remove(self, db: AsyncSession, *, employee_id: str) -> emp_models.Employee:
        employee_to_delete = await self.get(db, employee_id)
        if not employee_to_delete:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Employee not found")
        return await super().delete(db, id=employee_id)


employee = CRUDEmployee()


# =============================================================================
# 3. 행 단위 접근 정책용 직원 디렉터리
# =============================================================================
class SqlEmployeeDirectory:
    """
    `hrms.core.access_policy.EmployeeDirectory` 구현체입니다.
    정책 계산에 필요한 employee_id / reporting_manager_id 두 컬럼만 조회합니다.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_user_id(self, user_id: str) -> Optional[Row]:
        statement = select(
            emp_models.Employee.employee_id,
            emp_models.Employee.reporting_manager_id,
        ).where(emp_models.Employee.user_id == user_id)
        result = await self.db.execute(statement)
        return result.first()

    async def get_direct_reports(self, employee_id: str) -> List[Row]:
        statement = select(
            emp_models.Employee.employee_id,
            emp_models.Employee.reporting_manager_id,
        ).where(emp_models.Employee.reporting_manager_id == employee_id)
        result = await self.db.execute(statement)
        return list(result.all())
