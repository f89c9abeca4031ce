# hrms/core/crud_base.py

"""
공통 CRUD(Create, Read, Update, Delete) 작업을 위한 기본 클래스 모듈입니다.
모든 메서드는 비동기(async) 환경에서 동작하며, 조회 메서드는 행 단위 접근 필터를 함께 적용할 수 있습니다.
"""

import logging
from typing import Generic, List, Optional, Type, TypeVar, Any, Dict
from datetime import date, timedelta

from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession
from pydantic import BaseModel

from hrms.core.access_policy import FilterDecision
from hrms.core.access_helpers import apply_row_filter

ModelType = TypeVar("ModelType", bound=SQLModel)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)

logger = logging.getLogger(__name__)

# 행 단위 필터를 적용하지 않음을 명시적으로 나타내는 값 (관리 작업 등 필터가 필요 없는 조회용)
NO_ROW_FILTER = object()


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    모든 CRUD 작업에 대한 기본 클래스를 정의합니다.

    `access_column`은 행 단위 필터가 비교할 직원 ID 컬럼 이름입니다 (기본값: "employee_id").
    """
    def __init__(self, model: Type[ModelType], access_column: str = "employee_id"):
        self.model = model
        self.access_column = access_column

    def _filtered(self, query, access):
        # access가 NO_ROW_FILTER이면 필터 없이, 그 외(None 포함)에는 반드시 필터를 적용
        if access is NO_ROW_FILTER:
            return query
        return apply_row_filter(query, access, getattr(self.model, self.access_column))

    async def get(self, db: AsyncSession, id: Any) -> Optional[ModelType]:
        """
        ID를 기준으로 단일 레코드를 조회합니다. (행 단위 필터 미적용)
        """
        return await db.get(self.model, id)

    async def get_visible(
        self, db: AsyncSession, id: Any, *, access: Optional[FilterDecision]
    ) -> Optional[ModelType]:
        """
        ID와 행 단위 필터를 함께 만족하는 단일 레코드를 조회합니다.
        레코드가 없거나 접근 범위 밖이면 None을 반환합니다.
        """
        pk = self.model.__table__.primary_key.columns.values()[0]
        query = self._filtered(select(self.model).where(pk == id), access)
        result = await db.execute(query)
        return result.scalars().one_or_none()

    async def get_multi(
        self, db: AsyncSession, *, skip: int = 0, limit: int = 100, **kwargs: Any
    ) -> List[ModelType]:
        """
        여러 레코드를 조회합니다. 필터링을 위한 키워드 인자를 지원합니다. (행 단위 필터 미적용)
        """
        query = select(self.model).offset(skip).limit(limit)

        for field, value in kwargs.items():
            if hasattr(self.model, field):
                query = query.where(getattr(self.model, field) == value)

        result = await db.execute(query)
        return result.scalars().all()

    async def get_by_attribute(
        self, db: AsyncSession, *, attribute: str, value: Any
    ) -> Optional[ModelType]:
        statement = select(self.model).where(getattr(self.model, attribute) == value)
        response = await db.execute(statement)
        return response.scalar_one_or_none()

    async def get_filtered(
        self,
        db: AsyncSession,
        *,
        access: Any,                               # FilterDecision, None(결정 누락 -> 거부) 또는 NO_ROW_FILTER
        filters: Optional[Dict[str, Any]] = None,  # 다중 속성 필터: {"attribute_name": "value"}
        date_range_field: Optional[str] = None,    # 기간 검색을 적용할 날짜 필드 이름 (예: "attendance_date")
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        order_by_field: Optional[str] = None,
        order_desc: bool = True,
        skip: int = 0,
        limit: int = 100
    ) -> List[ModelType]:
        """
        행 단위 접근 필터, 다중 속성 및 기간 검색 기능을 포함한 다중 조회.
        """
        query = select(self.model)
        conditions = []

        # 1. 다중 속성 필터링
        if filters:
            for attribute, value in filters.items():
                if value is None:
                    continue
                if hasattr(self.model, attribute):
                    conditions.append(getattr(self.model, attribute) == value)
                else:
                    logger.warning("Model %s has no attribute '%s'", self.model.__name__, attribute)

        # 2. 기간 검색 필터링
        if date_range_field and hasattr(self.model, date_range_field):
            date_field = getattr(self.model, date_range_field)
            if start_date is not None:
                conditions.append(date_field >= start_date)
            if end_date is not None:
                # end_date 당일까지 포함
                conditions.append(date_field < end_date + timedelta(days=1))
        elif date_range_field:
            logger.warning("Model %s has no attribute '%s' for date range filtering.", self.model.__name__, date_range_field)

        if conditions:
            query = query.where(*conditions)

        # 3. 행 단위 접근 필터 (다른 조건과 AND로 결합)
        query = self._filtered(query, access)

        # 4. 정렬
        if order_by_field and hasattr(self.model, order_by_field):
            column = getattr(self.model, order_by_field)
            query = query.order_by(column.desc() if order_desc else column)
        elif order_by_field:
            logger.warning("Model %s has no attribute '%s' for ordering.", self.model.__name__, order_by_field)

        # 5. 페이징
        query = query.offset(skip).limit(limit)

        result = await db.execute(query)
        return result.scalars().all()

    async def create(self, db: AsyncSession, *, obj_in: CreateSchemaType) -> ModelType:
        """
        새로운 레코드를 생성합니다.
        """
        db_obj = self.model.model_validate(obj_in)
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj

    async def update(
        self, db: AsyncSession, *, db_obj: ModelType, obj_in: UpdateSchemaType
    ) -> ModelType:
        """
        기존 레코드를 업데이트합니다.
        """
        update_data = obj_in.model_dump(exclude_unset=True)
        for key, value in update_data.items():
            setattr(db_obj, key, value)

        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj

    async def delete(self, db: AsyncSession, *, id: Any) -> Optional[ModelType]:
        """
        ID를 기준으로 레코드를 삭제합니다.
        """
        db_obj = await db.get(self.model, id)
        if db_obj:
            await db.delete(db_obj)
            await db.commit()
        return db_obj
