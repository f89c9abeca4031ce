# tests/domains/test_usr_n.py

"""
'usr' 도메인 (사용자 관리 및 인증) 관련 API 엔드포인트에 대한 통합 테스트 모듈입니다.
"""

from datetime import timedelta
from types import SimpleNamespace

import pytest
from httpx import AsyncClient

from hrms.core.security import create_access_token


# =============================================================================
# 1. 인증 및 현재 사용자 접근 범위
# =============================================================================
@pytest.mark.asyncio
async def test_me_requires_token(client: AsyncClient):
    response = await client.get("/api/v1/usr/auth/me")
    assert response.status_code == 401
    assert response.json()["detail"] == "Could not validate credentials"


@pytest.mark.asyncio
async def test_me_rejects_invalid_token(client: AsyncClient):
    response = await client.get("/api/v1/usr/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_me_rejects_expired_token(client: AsyncClient):
    token = create_access_token({"sub": "usr-e1", "role": "employee"}, expires_delta=timedelta(minutes=-1))
    response = await client.get("/api/v1/usr/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_me_rejects_token_without_role(client: AsyncClient):
    token = create_access_token({"sub": "usr-e1"})
    response = await client.get("/api/v1/usr/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_me_as_manager(manager_client: AsyncClient):
    response = await manager_client.get("/api/v1/usr/auth/me")
    assert response.status_code == 200
    data = response.json()
    assert data["user_id"] == "usr-mgr"
    assert data["role"] == "manager"
    assert data["current_employee_id"] == "emp-mgr"
    assert data["unrestricted"] is False
    assert data["allowed_employee_ids"] == ["emp-e1", "emp-e2", "emp-mgr"]
    assert data["summary"] == "Manager - Access to 3 employees"


@pytest.mark.asyncio
async def test_me_as_employee(employee_client: AsyncClient):
    response = await employee_client.get("/api/v1/usr/auth/me")
    assert response.status_code == 200
    data = response.json()
    assert data["allowed_employee_ids"] == ["emp-e1"]
    assert data["summary"] == "Employee - Self access only"


@pytest.mark.asyncio
async def test_me_as_admin(admin_client: AsyncClient):
    response = await admin_client.get("/api/v1/usr/auth/me")
    assert response.status_code == 200
    data = response.json()
    assert data["unrestricted"] is True
    assert data["allowed_employee_ids"] == []
    assert data["current_employee_id"] is None
    assert data["summary"] == "HR/Admin - Full access"


@pytest.mark.asyncio
async def test_me_without_employee_profile(no_profile_client: AsyncClient):
    response = await no_profile_client.get("/api/v1/usr/auth/me")
    assert response.status_code == 200
    data = response.json()
    assert data["unrestricted"] is False
    assert data["allowed_employee_ids"] == []
    assert data["summary"] == "Employee - No access"


@pytest.mark.asyncio
async def test_me_with_unknown_role(authorized_client_factory):
    # 토큰의 역할이 알 수 없는 값이어도 인증은 되지만 접근 범위는 비어 있어야 함
    contractor = SimpleNamespace(user_id="usr-contractor", role="contractor")
    token = create_access_token({"sub": contractor.user_id, "role": contractor.role})
    async with authorized_client_factory() as client:
        response = await client.get("/api/v1/usr/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["allowed_employee_ids"] == []
    assert response.json()["summary"] == "Unknown role - Access to 0 employees"


# =============================================================================
# 2. 사용자 관리
# =============================================================================
@pytest.mark.asyncio
async def test_read_users_as_hr(hr_client: AsyncClient):
    response = await hr_client.get("/api/v1/usr/users")
    assert response.status_code == 200
    assert len(response.json()) == 7


@pytest.mark.asyncio
async def test_read_users_forbidden_for_manager(manager_client: AsyncClient):
    response = await manager_client.get("/api/v1/usr/users")
    assert response.status_code == 403
    assert response.json()["detail"] == "Not enough permissions."


@pytest.mark.asyncio
async def test_create_user_as_admin(admin_client: AsyncClient):
    response = await admin_client.post(
        "/api/v1/usr/users",
        json={"email": "new.hire@example.com", "full_name": "New Hire", "role": "employee"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "new.hire@example.com"
    assert data["role"] == "employee"
    assert len(data["user_id"]) == 36


@pytest.mark.asyncio
async def test_create_user_duplicate_email(admin_client: AsyncClient):
    response = await admin_client.post("/api/v1/usr/users", json={"email": "usr-e1@example.com"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Email already registered"


@pytest.mark.asyncio
async def test_create_user_forbidden_for_hr(hr_client: AsyncClient):
    response = await hr_client.post("/api/v1/usr/users", json={"email": "someone@example.com"})
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_update_user_role(admin_client: AsyncClient, org: SimpleNamespace):
    response = await admin_client.put(f"/api/v1/usr/users/{org.employee.user_id}", json={"role": "manager"})
    assert response.status_code == 200
    assert response.json()["role"] == "manager"


@pytest.mark.asyncio
async def test_cannot_demote_admin(admin_client: AsyncClient, org: SimpleNamespace):
    response = await admin_client.put(f"/api/v1/usr/users/{org.admin.user_id}", json={"role": "employee"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_update_unknown_user(admin_client: AsyncClient):
    response = await admin_client.put("/api/v1/usr/users/does-not-exist", json={"full_name": "x"})
    assert response.status_code == 404
