# hrms/domains/usr/__init__.py

"""
'usr' 도메인 패키지입니다.

시스템 사용자 계정과 역할(employee, manager, hr, admin)을 관리합니다.
인증 토큰의 `sub` 클레임은 이 도메인의 `User.user_id`를 가리킵니다.
"""
