# hrms/__init__.py

"""
HRMS FastAPI 애플리케이션의 메인 패키지입니다.

이 패키지는 FastAPI 애플리케이션의 진입점 (main.py),
공통 설정, 데이터베이스 연결, 인증 및 행 단위(row-level) 접근 제어를 담는 core 서브패키지,
그리고 인사 업무 도메인(usr, emp, att, pay)을 담는 domains 서브패키지로 구성됩니다.
"""

APP_NAME = "HRMS FastAPI API"
APP_VERSION = "0.1.0"
API_PREFIX = "/api/v1"  # API 라우트의 공통 접두사 (main.py에서 적용)

__version__ = APP_VERSION
__title__ = APP_NAME
__description__ = "Human Resource Management System (HRMS) API backend."
__all__ = []
