# hrms/domains/__init__.py

"""
HRMS의 비즈니스 도메인 패키지입니다.

- `usr`: 시스템 사용자와 역할(role).
- `emp`: 부서 및 직원(보고 라인 포함) 정보.
- `att`: 근태(출퇴근) 기록.
- `pay`: 급여 명세서 (민감 재무 정보).

모든 테이블은 PostgreSQL의 'hr' 스키마에 속합니다.
"""
