"""Integration tests for the attendance endpoints through the gateway app."""

import time as clock
from datetime import time

import pytest
from jose import jwt
from libs.common.config import get_settings
from libs.common.datetime_utils import local_today
from tests.factories import (
    DEPARTMENT_WITHOUT_HOURS,
    ROLE_ADMIN,
    ROLE_UNASSIGNED,
    YESTERDAY,
    AttendanceRecordFactory,
    AuthUserFactory,
    DirectoryUserFactory,
)


def _bearer_for(user) -> dict:
    settings = get_settings()
    token = jwt.encode(
        {
            "sub": user.id,
            "email": user.email,
            "aud": settings.SUPABASE_JWT_AUDIENCE,
            "exp": int(clock.time()) + 3600,
            "user_metadata": {
                "role_id": user.role_id,
                "department_id": user.department_id,
                "full_name": user.full_name,
            },
        },
        settings.SUPABASE_JWT_SECRET,
        algorithm="HS256",
    )
    return {"Authorization": f"Bearer {token}"}


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_missing_authorization_header(client):
    response = await client.get("/attendance")

    assert response.status_code == 401
    body = response.json()
    assert body["detail"] == "No authorization header provided"
    assert body["request_id"]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_invalid_token(client):
    response = await client.post(
        "/attendance/submit-time",
        json={"time": "09:00"},
        headers={"Authorization": "Bearer not-a-jwt"},
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid token"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_real_token_submits_time(client, attendance_store):
    """A signed token carries role and department through to the workflow."""
    user = AuthUserFactory.create(full_name="Ana Cruz")

    response = await client.post(
        "/attendance/submit-time",
        json={"time": "08:50", "remarks": "early"},
        headers=_bearer_for(user),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["type"] == "time_in"
    assert body["message"] == "Time in recorded successfully"
    assert body["data"]["user_id"] == user.id
    assert body["data"]["time_in"] == "08:50:00"
    assert body["data"]["status"] == "present"
    assert body["data"]["remarks"] == "early"
    assert (user.id, local_today()) in attendance_store.records


# ---------------------------------------------------------------------------
# POST /attendance/submit-time
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_submit_time_day_cycle(client, login_as, auth_headers):
    login_as(AuthUserFactory.create())

    first = await client.post(
        "/attendance/submit-time", json={"time": "09:15:00"}, headers=auth_headers
    )
    second = await client.post(
        "/attendance/submit-time", json={"time": "17:45"}, headers=auth_headers
    )
    third = await client.post(
        "/attendance/submit-time", json={"time": "18:00"}, headers=auth_headers
    )

    assert first.json()["type"] == "time_in"
    assert first.json()["data"]["status"] == "late"
    assert second.json()["type"] == "time_out"
    assert second.json()["message"] == "Time out recorded successfully"
    assert second.json()["data"]["time_out"] == "17:45:00"
    assert third.status_code == 200
    assert third.json()["type"] == "completed"
    assert third.json()["message"] == "Attendance for today is already completed"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_submit_time_configuration_error_is_a_result(
    client, login_as, auth_headers
):
    """Missing office hours are reported in the body with HTTP 200."""
    login_as(AuthUserFactory.create(department_id=DEPARTMENT_WITHOUT_HOURS))

    response = await client.post(
        "/attendance/submit-time", json={"time": "09:00"}, headers=auth_headers
    )

    assert response.status_code == 200
    assert response.json() == {
        "success": False,
        "message": f"Office hours not found for department {DEPARTMENT_WITHOUT_HOURS}",
        "type": "error",
        "data": None,
    }


@pytest.mark.asyncio
@pytest.mark.integration
@pytest.mark.parametrize(
    "payload", [{}, {"time": "9am"}, {"time": "25:00"}, {"time": "09:00:00:00"}]
)
async def test_submit_time_rejects_malformed_time(
    client, login_as, auth_headers, payload
):
    login_as(AuthUserFactory.create())

    response = await client.post(
        "/attendance/submit-time", json=payload, headers=auth_headers
    )

    assert response.status_code == 422
    assert isinstance(response.json()["detail"], list)


# ---------------------------------------------------------------------------
# GET /attendance
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_list_attendance_for_admin(
    client, login_as, auth_headers, attendance_store, user_directory
):
    employee = AuthUserFactory.create(full_name="Ana Cruz")
    user_directory.users[employee.id] = DirectoryUserFactory.from_auth_user(employee)
    attendance_store.records[(employee.id, YESTERDAY)] = AttendanceRecordFactory.create(
        user_id=employee.id,
        date=YESTERDAY,
        time_in=time(9, 2),
        time_out=time(17, 0),
    )
    login_as(AuthUserFactory.create(role_id=ROLE_ADMIN))

    response = await client.get("/attendance", headers=auth_headers)

    assert response.status_code == 200
    rows = response.json()
    assert len(rows) == 1
    assert rows[0]["user_name"] == "Ana Cruz"
    assert rows[0]["date"] == YESTERDAY.isoformat()
    assert rows[0]["time_in"] == "09:02:00"
    assert rows[0]["time_out"] == "17:00:00"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_list_attendance_denied(client, login_as, auth_headers):
    login_as(AuthUserFactory.create(role_id=ROLE_UNASSIGNED))

    response = await client.get("/attendance", headers=auth_headers)

    assert response.status_code == 403
    assert response.json()["detail"] == "Access control not found or unauthorized"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_list_attendance_lookup_failure(
    client, login_as, auth_headers, attendance_store, user_directory
):
    employee = AuthUserFactory.create()
    attendance_store.records[(employee.id, YESTERDAY)] = AttendanceRecordFactory.create(
        user_id=employee.id, date=YESTERDAY
    )
    user_directory.users[employee.id] = DirectoryUserFactory.from_auth_user(employee)
    user_directory.failing.add(employee.id)
    login_as(employee)

    response = await client.get("/attendance", headers=auth_headers)

    assert response.status_code == 502
    assert response.json()["detail"].startswith("Failed to fetch user data")


@pytest.mark.asyncio
@pytest.mark.integration
async def test_request_id_header_is_echoed(client):
    response = await client.get("/health", headers={"X-Request-ID": "req-123"})

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert response.headers["X-Request-ID"] == "req-123"
