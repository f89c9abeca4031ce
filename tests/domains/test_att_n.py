# tests/domains/test_att_n.py

"""
'att' 도메인 (근태 관리) 관련 API 엔드포인트에 대한 통합 테스트 모듈입니다.

- 목록/상세: team-viewable
- 출근/퇴근: self-only
- 요약: hr-admin-only
"""

from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlmodel.ext.asyncio.session import AsyncSession

from hrms.domains.att import crud as att_crud
from hrms.domains.att import models as att_models


@pytest_asyncio.fixture(scope="function")
async def attendance_records(db_session: AsyncSession, org: SimpleNamespace) -> dict:
    """조직도의 각 직원에 대한 근태 기록을 생성합니다."""
    Status = att_models.AttendanceStatus
    rows = [
        ("att-e1-1", "emp-e1", date(2024, 3, 4), Status.PRESENT),
        ("att-e1-2", "emp-e1", date(2024, 3, 5), Status.LATE),
        ("att-e2-1", "emp-e2", date(2024, 3, 4), Status.PRESENT),
        ("att-e3-1", "emp-e3", date(2024, 3, 4), Status.ABSENT),
        ("att-mgr-1", "emp-mgr", date(2024, 3, 4), Status.PRESENT),
        ("att-hr-1", "emp-hr", date(2024, 4, 1), Status.HALF_DAY),
    ]
    records = {}
    for attendance_id, employee_id, attendance_date, status in rows:
        record = att_models.Attendance(
            attendance_id=attendance_id,
            employee_id=employee_id,
            attendance_date=attendance_date,
            status=status,
        )
        db_session.add(record)
        records[attendance_id] = record
    await db_session.commit()
    return records


def _ids(response) -> list:
    return sorted(a["attendance_id"] for a in response.json())


# =============================================================================
# 1. 목록 조회 (team-viewable)
# =============================================================================
@pytest.mark.asyncio
async def test_employee_sees_own_attendance(employee_client: AsyncClient, attendance_records):
    response = await employee_client.get("/api/v1/att/attendances")
    assert response.status_code == 200
    assert _ids(response) == ["att-e1-1", "att-e1-2"]


@pytest.mark.asyncio
async def test_list_is_ordered_by_latest_date(employee_client: AsyncClient, attendance_records):
    response = await employee_client.get("/api/v1/att/attendances")
    assert [a["attendance_date"] for a in response.json()] == ["2024-03-05", "2024-03-04"]


@pytest.mark.asyncio
async def test_manager_sees_team_attendance(manager_client: AsyncClient, attendance_records):
    response = await manager_client.get("/api/v1/att/attendances")
    assert response.status_code == 200
    assert _ids(response) == ["att-e1-1", "att-e1-2", "att-e2-1", "att-mgr-1"]


@pytest.mark.asyncio
async def test_admin_sees_all_attendance(admin_client: AsyncClient, attendance_records):
    response = await admin_client.get("/api/v1/att/attendances")
    assert len(response.json()) == 6


@pytest.mark.asyncio
async def test_no_profile_sees_empty_list(no_profile_client: AsyncClient, attendance_records):
    response = await no_profile_client.get("/api/v1/att/attendances")
    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_manager_filter_outside_team_returns_nothing(manager_client: AsyncClient, attendance_records):
    # 팀 밖의 직원을 명시적으로 요청해도 행 필터가 우선함
    response = await manager_client.get("/api/v1/att/attendances", params={"employee_id": "emp-e3"})
    assert response.json() == []


@pytest.mark.asyncio
async def test_date_range_and_status_filters(manager_client: AsyncClient, attendance_records):
    response = await manager_client.get(
        "/api/v1/att/attendances", params={"start_date": "2024-03-05", "end_date": "2024-03-31"}
    )
    assert _ids(response) == ["att-e1-2"]

    response = await manager_client.get("/api/v1/att/attendances", params={"status": "Present"})
    assert _ids(response) == ["att-e1-1", "att-e2-1", "att-mgr-1"]


# =============================================================================
# 2. 상세 조회 / 수정 / 삭제
# =============================================================================
@pytest.mark.asyncio
async def test_read_own_attendance(employee_client: AsyncClient, attendance_records):
    response = await employee_client.get("/api/v1/att/attendances/att-e1-1")
    assert response.status_code == 200
    assert response.json()["employee_id"] == "emp-e1"


@pytest.mark.asyncio
async def test_colleague_attendance_is_not_visible(employee_client: AsyncClient, attendance_records):
    response = await employee_client.get("/api/v1/att/attendances/att-e2-1")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_no_profile_detail_is_forbidden(no_profile_client: AsyncClient, attendance_records):
    response = await no_profile_client.get("/api/v1/att/attendances/att-e1-1")
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_manager_updates_team_attendance(manager_client: AsyncClient, attendance_records):
    response = await manager_client.put("/api/v1/att/attendances/att-e2-1", json={"status": "Late"})
    assert response.status_code == 200
    assert response.json()["status"] == "Late"


@pytest.mark.asyncio
async def test_manager_cannot_update_outside_team(manager_client: AsyncClient, attendance_records):
    response = await manager_client.put("/api/v1/att/attendances/att-e3-1", json={"status": "Present"})
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_employee_cannot_update_attendance(employee_client: AsyncClient, attendance_records):
    response = await employee_client.put("/api/v1/att/attendances/att-e1-1", json={"status": "Present"})
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_delete_attendance_as_admin(admin_client: AsyncClient, attendance_records, db_session: AsyncSession):
    response = await admin_client.delete("/api/v1/att/attendances/att-e3-1")
    assert response.status_code == 204
    assert await att_crud.attendance.get(db_session, "att-e3-1") is None

    response = await admin_client.delete("/api/v1/att/attendances/att-e3-1")
    assert response.status_code == 404


# =============================================================================
# 3. 출근 / 퇴근 (self-only)
# =============================================================================
@pytest.mark.asyncio
async def test_check_in_and_check_out(employee_client: AsyncClient):
    response = await employee_client.post("/api/v1/att/attendances/check-in")
    assert response.status_code == 201
    checked_in = response.json()
    assert checked_in["employee_id"] == "emp-e1"
    assert checked_in["check_in_time"] is not None
    assert checked_in["check_out_time"] is None

    response = await employee_client.post("/api/v1/att/attendances/check-in")
    assert response.status_code == 400
    assert response.json()["detail"] == "Already checked in today"

    response = await employee_client.post("/api/v1/att/attendances/check-out")
    assert response.status_code == 200
    checked_out = response.json()
    assert checked_out["attendance_id"] == checked_in["attendance_id"]
    assert checked_out["check_out_time"] is not None
    assert Decimal(str(checked_out["total_hour"])) >= 0

    response = await employee_client.post("/api/v1/att/attendances/check-out")
    assert response.status_code == 400
    assert response.json()["detail"] == "Already checked out today"


@pytest.mark.asyncio
async def test_check_out_without_check_in(employee_client: AsyncClient):
    response = await employee_client.post("/api/v1/att/attendances/check-out")
    assert response.status_code == 400
    assert response.json()["detail"] == "No check-in found for today"


@pytest.mark.asyncio
async def test_hr_checks_in_for_own_record_only(hr_client: AsyncClient):
    response = await hr_client.post("/api/v1/att/attendances/check-in")
    assert response.status_code == 201
    assert response.json()["employee_id"] == "emp-hr"


@pytest.mark.asyncio
async def test_admin_without_profile_cannot_check_in(admin_client: AsyncClient):
    response = await admin_client.post("/api/v1/att/attendances/check-in")
    assert response.status_code == 403
    assert response.json()["detail"] == "Employee profile not found for current user"


# =============================================================================
# 4. 상태별 요약 (hr-admin-only)
# =============================================================================
@pytest.mark.asyncio
async def test_summary_as_hr(hr_client: AsyncClient, attendance_records):
    response = await hr_client.get("/api/v1/att/attendances/summary")
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 6
    assert data["by_status"] == {"Present": 3, "Late": 1, "Absent": 1, "Half Day": 1}


@pytest.mark.asyncio
async def test_summary_with_date_range(admin_client: AsyncClient, attendance_records):
    response = await admin_client.get(
        "/api/v1/att/attendances/summary", params={"start_date": "2024-03-01", "end_date": "2024-03-31"}
    )
    data = response.json()
    assert data["total"] == 5
    assert "Half Day" not in data["by_status"]


@pytest.mark.asyncio
async def test_summary_forbidden_for_manager(manager_client: AsyncClient, attendance_records):
    response = await manager_client.get("/api/v1/att/attendances/summary")
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_summary_forbidden_for_employee(employee_client: AsyncClient, attendance_records):
    response = await employee_client.get("/api/v1/att/attendances/summary")
    assert response.status_code == 403
