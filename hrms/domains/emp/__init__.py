# hrms/domains/emp/__init__.py

"""
'emp' 도메인 패키지입니다.

부서(Department)와 직원(Employee) 정보를 관리합니다.
직원의 `reporting_manager_id`가 이루는 보고 라인은 행 단위 접근 제어에서
관리자의 '팀' 범위(직속 부하직원)를 계산하는 데 사용됩니다.
"""
