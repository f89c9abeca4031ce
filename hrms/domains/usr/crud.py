# hrms/domains/usr/crud.py

"""
'usr' 도메인의 CRUD 작업을 담당하는 모듈입니다.
"""

from typing import Optional
from sqlmodel.ext.asyncio.session import AsyncSession
from fastapi import HTTPException, status

from hrms.core.crud_base import CRUDBase
from . import models as usr_models
from . import schemas as usr_schemas


class CRUDUser(CRUDBase[usr_models.User, usr_schemas.UserCreate, usr_schemas.UserUpdate]):
    def __init__(self):
        super().__init__(model=usr_models.User)

    async def get_by_email(self, db: AsyncSession, *, email: str) -> Optional[usr_models.User]:
        """이메일로 사용자를 조회합니다."""
        return await self.get_by_attribute(db, attribute="email", value=email)

    async def create(self, db: AsyncSession, *, obj_in: usr_schemas.UserCreate) -> usr_models.User:
        """새로운 사용자를 생성하며 이메일 중복을 검사합니다."""
        if await self.get_by_email(db, email=obj_in.email):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")

        db_user = usr_models.User(**obj_in.model_dump(exclude_none=True))
        db.add(db_user)
        await db.commit()
        await db.refresh(db_user)
        return db_user

    async def update(self, db: AsyncSession, *, db_obj: usr_models.User, obj_in: usr_schemas.UserUpdate) -> usr_models.User:
        """
        사용자 정보를 업데이트합니다. 관리자 계정의 역할 변경 및 비활성화를 방지합니다.
        """
        if db_obj.role == usr_models.UserRole.ADMIN:
            if obj_in.role is not None and obj_in.role != usr_models.UserRole.ADMIN:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot change the role of an admin account.")
            if obj_in.is_active is False:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot deactivate an admin account.")
        return await super().update(db, db_obj=db_obj, obj_in=obj_in)


user = CRUDUser()
