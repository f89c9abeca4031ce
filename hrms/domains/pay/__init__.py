# hrms/domains/pay/__init__.py

"""
'pay' 도메인 패키지입니다.

급여 명세서(Payslip)는 민감한 재무 정보이므로 'sensitive-financial' 전략으로
조회 범위가 제한됩니다. 관리자(manager)도 팀원의 명세서는 볼 수 없습니다.
"""
