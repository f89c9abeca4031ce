# hrms/domains/att/__init__.py

"""
'att' 도메인 패키지입니다. 직원별 근태(출근/퇴근) 기록을 관리합니다.
"""
