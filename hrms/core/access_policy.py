# hrms/core/access_policy.py

"""
행 단위(row-level) 접근 제어 정책을 계산하는 모듈입니다.

인증된 사용자(Identity)의 역할과 조직 내 위치(본인 직원 레코드, 직속 부하직원)를 바탕으로
요청이 조회할 수 있는 직원 ID 집합을 `FilterDecision`으로 계산합니다.

- 라우트마다 정적으로 하나의 `FilterStrategy`를 선언합니다 (데이터에서 유도하지 않음).
- 결정은 요청마다 새로 계산되며 캐시하거나 저장하지 않습니다.
- '접근 불가'는 예외가 아니라 빈 집합으로 표현합니다. 예외는 조회(lookup) 실패와 같은
  인프라 오류에만 사용되며, 호출자는 이를 '전체 허용'으로 바꾸어서는 안 됩니다.

조회 가능 범위 요약:

    전략                 employee   manager          hr / admin
    employee-data        본인        본인 + 직속팀      전체
    team-viewable        본인        본인 + 직속팀      전체
    sensitive-financial  본인        없음              전체
    hr-admin-only        없음        없음              전체
    self-only            본인        본인              본인
"""

import logging
from enum import Enum
from typing import FrozenSet, List, Optional, Protocol, Union

from pydantic import BaseModel, ConfigDict

from hrms.domains.usr.models import UserRole

logger = logging.getLogger(__name__)

# 'UNRESTRICTED' (필터링 없음, 전체 조회)를 나타내는 값.
# 빈 집합(frozenset())은 '아무것도 볼 수 없음'을 의미하며 UNRESTRICTED와 엄격히 구분됩니다.
UNRESTRICTED = None

HR_OR_ADMIN_ROLES = frozenset({UserRole.HR.value, UserRole.ADMIN.value})


# =============================================================================
# 1. 전략 및 값 객체
# =============================================================================
class FilterStrategy(str, Enum):
    """
    라우트/작업 단위로 선언하는 이름 붙은 접근 규칙입니다.
    """
    EMPLOYEE_DATA = "employee-data"               # 직원: 본인, 관리자: 본인+팀, HR/Admin: 전체
    SENSITIVE_FINANCIAL = "sensitive-financial"   # 직원: 본인, 관리자: 없음, HR/Admin: 전체
    TEAM_VIEWABLE = "team-viewable"               # employee-data와 동일한 규칙
    HR_ADMIN_ONLY = "hr-admin-only"               # HR/Admin만 전체, 그 외 없음
    SELF_ONLY = "self-only"                       # HR/Admin 포함 모두 본인만


class Identity(BaseModel):
    """
    인증 계층이 제공하는 호출자 정보입니다. 요청 처리 동안 변경되지 않습니다.
    `role`은 알 수 없는 값일 수 있으며, 이 경우 어떤 권한도 부여되지 않습니다.
    """
    model_config = ConfigDict(frozen=True)

    user_id: str
    role: str


class FilterDecision(BaseModel):
    """
    하나의 요청에 대해 전략을 적용한 결과입니다.

    `allowed_employee_ids`가 접근 판단의 유일한 근거이며, 역할 플래그는 로그/진단용입니다.
    생성 후에는 변경할 수 없으므로, 다른 전략으로 다시 계산하려면 새 결정을 만들어야 합니다.
    """
    model_config = ConfigDict(frozen=True)

    # 기본값은 거부(빈 집합). 전체 조회는 리졸버의 HR/Admin 분기에서만 명시적으로 지정합니다.
    allowed_employee_ids: Optional[FrozenSet[str]] = frozenset()
    current_employee_id: Optional[str] = None
    is_hr_or_admin: bool = False
    is_manager: bool = False
    is_employee: bool = False
    strategy: Optional[str] = None

    @property
    def is_unrestricted(self) -> bool:
        return self.allowed_employee_ids is UNRESTRICTED


# =============================================================================
# 2. 직원 디렉터리 (외부 협력자 인터페이스)
# =============================================================================
class EmployeeRef(Protocol):
    employee_id: str
    reporting_manager_id: Optional[str]


class EmployeeDirectory(Protocol):
    """
    정책 계산에 필요한 읽기 전용 직원 조회 인터페이스입니다.
    구현체: `hrms.domains.emp.crud.SqlEmployeeDirectory`
    """

    async def get_by_user_id(self, user_id: str) -> Optional[EmployeeRef]:
        ...

    async def get_direct_reports(self, employee_id: str) -> List[EmployeeRef]:
        ...


# =============================================================================
# 3. 정책 리졸버
# =============================================================================
def _coerce_strategy(strategy: Union[FilterStrategy, str]) -> Optional[FilterStrategy]:
    if isinstance(strategy, FilterStrategy):
        return strategy
    try:
        return FilterStrategy(strategy)
    except ValueError:
        return None


async def resolve_row_filter(
    identity: Identity,
    strategy: Union[FilterStrategy, str],
    directory: EmployeeDirectory,
) -> FilterDecision:
    """
    호출자와 전략으로부터 `FilterDecision`을 계산합니다.

    최대 두 번의 조회만 수행합니다: 호출자 본인의 직원 레코드(user_id 기준),
    그리고 관리자 분기에서만 직속 부하직원 목록. 조회 중 발생한 오류는 그대로 전파됩니다.
    """
    role = identity.role
    flags = dict(
        is_hr_or_admin=role in HR_OR_ADMIN_ROLES,
        is_manager=role == UserRole.MANAGER.value,
        is_employee=role == UserRole.EMPLOYEE.value,
    )
    resolved = _coerce_strategy(strategy)
    strategy_value = resolved.value if resolved is not None else str(strategy)

    if not any(flags.values()):
        logger.warning("Unrecognized role '%s' for user '%s'; no elevated access granted.", role, identity.user_id)
    if resolved is None:
        logger.warning("Unrecognized filter strategy '%s' for user '%s'; denying access.", strategy, identity.user_id)

    # 1. HR/Admin은 self-only를 제외한 모든 전략에서 전체 조회 (직원 레코드 조회 불필요)
    if flags["is_hr_or_admin"] and resolved is not None and resolved is not FilterStrategy.SELF_ONLY:
        return FilterDecision(allowed_employee_ids=UNRESTRICTED, strategy=strategy_value, **flags)

    # 2. 호출자 본인의 직원 레코드 조회
    current_employee = await directory.get_by_user_id(identity.user_id)
    if current_employee is None:
        # 직원 프로필이 없는 사용자는 전략과 무관하게 아무것도 볼 수 없음
        return FilterDecision(allowed_employee_ids=frozenset(), strategy=strategy_value, **flags)

    current_id = current_employee.employee_id
    allowed: FrozenSet[str] = frozenset()

    # 3. 전략별 분기. 모든 분기는 명시적이며, 기본값은 '거부'입니다.
    if resolved in (FilterStrategy.EMPLOYEE_DATA, FilterStrategy.TEAM_VIEWABLE):
        if flags["is_employee"]:
            allowed = frozenset({current_id})
        elif flags["is_manager"]:
            team = await directory.get_direct_reports(current_id)
            allowed = frozenset({current_id}) | frozenset(member.employee_id for member in team)
        else:
            allowed = frozenset()
    elif resolved is FilterStrategy.SENSITIVE_FINANCIAL:
        if flags["is_employee"]:
            allowed = frozenset({current_id})
        else:
            # 관리자는 팀원의 재무 정보에 접근할 수 없음
            allowed = frozenset()
    elif resolved is FilterStrategy.SELF_ONLY:
        allowed = frozenset({current_id})
    elif resolved is FilterStrategy.HR_ADMIN_ONLY:
        # HR/Admin은 1단계에서 이미 반환되었으므로 여기 도달한 호출자는 거부
        allowed = frozenset()
    else:
        # 알 수 없는 전략 (경고는 조회 전에 이미 기록됨)
        allowed = frozenset()

    return FilterDecision(
        allowed_employee_ids=allowed,
        current_employee_id=current_id,
        strategy=strategy_value,
        **flags,
    )
