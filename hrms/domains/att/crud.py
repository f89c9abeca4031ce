# hrms/domains/att/crud.py

"""
'att' 도메인의 CRUD 작업을 담당하는 모듈입니다.
출근(check-in) / 퇴근(check-out) 처리와 상태별 요약 집계를 포함합니다.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
from datetime import date, datetime, timedelta, timezone

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from fastapi import HTTPException, status

from hrms.core.crud_base import CRUDBase
from hrms.core.access_policy import FilterDecision
from hrms.core.access_helpers import apply_row_filter
from . import models as att_models
from . import schemas as att_schemas

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite 등에서 tz 정보 없이 돌아온 값은 UTC로 간주
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class CRUDAttendance(CRUDBase[att_models.Attendance, att_schemas.AttendanceCreate, att_schemas.AttendanceUpdate]):
    def __init__(self):
        super().__init__(model=att_models.Attendance, access_column="employee_id")

    async def get_for_day(
        self, db: AsyncSession, *, employee_id: str, attendance_date: date
    ) -> Optional[att_models.Attendance]:
        statement = select(self.model).where(
            self.model.employee_id == employee_id,
            self.model.attendance_date == attendance_date,
        )
        result = await db.execute(statement)
        return result.scalars().first()

    async def check_in(self, db: AsyncSession, *, employee_id: str, now: Optional[datetime] = None) -> att_models.Attendance:
        """
        오늘 날짜의 출근 기록을 생성합니다. 이미 출근한 경우 400을 반환합니다.
        """
        now = now or datetime.now(timezone.utc)
        if await self.get_for_day(db, employee_id=employee_id, attendance_date=now.date()):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Already checked in today")

        db_obj = att_models.Attendance(
            employee_id=employee_id,
            attendance_date=now.date(),
            check_in_time=now,
            status=att_models.AttendanceStatus.PRESENT,
        )
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        logger.info("Employee %s checked in at %s", employee_id, now.isoformat())
        return db_obj

    async def check_out(self, db: AsyncSession, *, employee_id: str, now: Optional[datetime] = None) -> att_models.Attendance:
        """
        오늘 날짜의 출근 기록에 퇴근 시각과 총 근무 시간을 기록합니다.
        """
        now = now or datetime.now(timezone.utc)
        db_obj = await self.get_for_day(db, employee_id=employee_id, attendance_date=now.date())
        if not db_obj or db_obj.check_in_time is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No check-in found for today")
        if db_obj.check_out_time is not None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Already checked out today")

        worked: timedelta = now - _as_utc(db_obj.check_in_time)
        hours = Decimal(worked.total_seconds()) / Decimal(3600)
        db_obj.check_out_time = now
        db_obj.total_hour = hours.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj

    async def summarize(
        self,
        db: AsyncSession,
        *,
        access: Optional[FilterDecision],
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> att_schemas.AttendanceSummary:
        """
        접근 범위 안의 근태 기록을 상태별로 집계합니다.
        """
        query = select(self.model.status, func.count()).group_by(self.model.status)
        if start_date is not None:
            query = query.where(self.model.attendance_date >= start_date)
        if end_date is not None:
            query = query.where(self.model.attendance_date <= end_date)
        query = apply_row_filter(query, access, self.model.employee_id)

        result = await db.execute(query)
        by_status = {row[0]: row[1] for row in result.all()}
        return att_schemas.AttendanceSummary(
            start_date=start_date,
            end_date=end_date,
            total=sum(by_status.values()),
            by_status=by_status,
        )


attendance = CRUDAttendance()
