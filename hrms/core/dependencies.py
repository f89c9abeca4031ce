# hrms/core/dependencies.py

"""
FastAPI 애플리케이션의 의존성 주입(Dependency Injection)을 정의하는 모듈입니다.

- 현재 인증된 호출자 정보 획득 (get_current_identity).
- 역할 기반 라우트 가드 (require_roles).
- 라우트별 행 단위 접근 필터 결정 (row_filter).
"""

import logging
from typing import Union

from fastapi import Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from hrms.core.database import get_session
from hrms.core.access_policy import FilterDecision, FilterStrategy, Identity, resolve_row_filter
from hrms.core.access_helpers import describe_decision
# flake8: noqa
from hrms.core.security import (
    create_access_token,
    get_current_identity,
    require_roles,
)
from hrms.domains.emp.crud import SqlEmployeeDirectory

logger = logging.getLogger(__name__)


def row_filter(strategy: Union[FilterStrategy, str] = FilterStrategy.EMPLOYEE_DATA):
    """
    라우트에 행 단위 접근 전략을 선언하는 의존성을 반환합니다.
    계산된 `FilterDecision`은 라우트 함수의 인자로 명시적으로 전달됩니다.

    Example:
        @router.get("/attendances")
        async def read_attendances(
            decision: FilterDecision = Depends(deps.row_filter(FilterStrategy.TEAM_VIEWABLE)),
        ):
            ...
    """
    async def _resolve(
        identity: Identity = Depends(get_current_identity),
        db: AsyncSession = Depends(get_session),
    ) -> FilterDecision:
        try:
            decision = await resolve_row_filter(identity, strategy, SqlEmployeeDirectory(db))
        except SQLAlchemyError:
            # 조회 실패는 '거부'나 '허용'으로 바꾸지 않고 요청 실패로 전파합니다.
            logger.exception("Error in role-based filter for user '%s'", identity.user_id)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error applying role-based filtering",
            )
        logger.debug(
            "Row filter [%s] for user '%s': %s",
            decision.strategy, identity.user_id, describe_decision(decision),
        )
        return decision

    return _resolve
