# hrms/core/access_helpers.py

"""
`FilterDecision`을 SQLAlchemy 쿼리 조건으로 변환하고, 서비스/라우터에서 사용할
접근 확인 헬퍼를 제공하는 모듈입니다.

모든 헬퍼는 결정(decision)이 없는 경우(`None`, 즉 라우트에 row_filter 의존성이 빠진 경우)
'접근 불가'로 처리하고 경고 로그를 남깁니다. 결정이 없다는 것을 '전체 허용'으로 해석하지 않습니다.
"""

import logging
from typing import Optional

from sqlalchemy import false
from sqlalchemy.sql import ColumnElement

from hrms.core.access_policy import FilterDecision

logger = logging.getLogger(__name__)


def _warn_missing(helper: str) -> None:
    logger.warning(
        "Row filter decision not found in %s. Did you forget to declare deps.row_filter() on the route? "
        "Denying access by default.",
        helper,
    )


def build_predicate(decision: Optional[FilterDecision], column) -> Optional[ColumnElement]:
    """
    결정을 쿼리 조건으로 변환합니다.

    - UNRESTRICTED: None (필터를 적용하지 않음)
    - 빈 집합 / 결정 없음: 어떤 행과도 일치하지 않는 조건
    - ID 1개: `column == id`
    - 그 외: `column IN (...)`
    """
    if decision is None:
        _warn_missing("build_predicate")
        return false()
    if decision.is_unrestricted:
        return None
    ids = decision.allowed_employee_ids
    if not ids:
        # 빈 IN 목록 대신 항상 거짓인 조건을 사용
        return false()
    if len(ids) == 1:
        (only_id,) = ids
        return column == only_id
    return column.in_(sorted(ids))


def apply_row_filter(statement, decision: Optional[FilterDecision], column):
    """
    select 문에 행 단위 필터 조건을 AND로 추가합니다. UNRESTRICTED이면 그대로 반환합니다.

    Example:
        query = select(Attendance).where(Attendance.status == "Present")
        query = apply_row_filter(query, decision, Attendance.employee_id)
    """
    predicate = build_predicate(decision, column)
    if predicate is None:
        return statement
    return statement.where(predicate)


def has_access(decision: Optional[FilterDecision]) -> bool:
    """조회 가능한 데이터가 하나라도 있는지 확인합니다 (쿼리 전 조기 반환용)."""
    if decision is None:
        _warn_missing("has_access")
        return False
    return decision.is_unrestricted or len(decision.allowed_employee_ids) > 0


def can_access_employee(decision: Optional[FilterDecision], employee_id: Optional[str]) -> bool:
    """특정 직원의 데이터에 접근할 수 있는지 확인합니다 (상세/수정/삭제용)."""
    if decision is None:
        _warn_missing("can_access_employee")
        return False
    if decision.is_unrestricted:
        return True
    return employee_id in decision.allowed_employee_ids


def current_employee_id(decision: Optional[FilterDecision]) -> Optional[str]:
    if decision is None:
        _warn_missing("current_employee_id")
        return None
    return decision.current_employee_id


def describe_decision(decision: Optional[FilterDecision]) -> str:
    """
    로그/디버깅용 요약 문자열을 반환합니다. 접근 판단에 사용해서는 안 됩니다.
    """
    if decision is None:
        return "No role filter applied"

    if decision.is_unrestricted:
        if decision.is_hr_or_admin:
            return "HR/Admin - Full access"
        return "Unrestricted access"

    count = len(decision.allowed_employee_ids)
    if decision.is_hr_or_admin:
        return f"HR/Admin - Access to {count} employees"
    if decision.is_manager:
        return f"Manager - Access to {count} employees"
    if decision.is_employee:
        return "Employee - Self access only" if count else "Employee - No access"
    return f"Unknown role - Access to {count} employees"
