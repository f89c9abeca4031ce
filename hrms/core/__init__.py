# hrms/core/__init__.py

"""
FastAPI 애플리케이션의 핵심 구성 요소 패키지입니다.

- `config.py`: 애플리케이션의 설정 및 환경 변수 관리 (Pydantic Settings).
- `database.py`: 데이터베이스 연결, 세션 관리 (SQLModel 및 AsyncSQLAlchemy).
- `security.py`: JWT 기반 인증 및 역할(role) 기반 라우트 가드.
- `access_policy.py`: 역할/조직 위치로부터 조회 가능한 직원 범위를 계산하는 정책 리졸버.
- `access_helpers.py`: 정책 결정을 쿼리 조건(predicate)으로 변환하는 헬퍼.
- `crud_base.py`: 공통 비동기 CRUD 기본 클래스.
- `dependencies.py`: FastAPI 의존성 주입에서 사용될 공통 의존성 함수들.
"""

__title__ = "HRMS Core"
__description__ = "Core components for HRMS FastAPI application."
__version__ = "0.1.0"
__all__ = []
