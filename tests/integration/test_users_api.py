"""Integration tests for user management endpoints."""

import pytest
from tests.factories import (
    DEPARTMENT_ENGINEERING,
    ROLE_ADMIN,
    ROLE_EMPLOYEE,
    AuthUserFactory,
    DepartmentFactory,
    DirectoryUserFactory,
    RoleFactory,
)


def _new_user_payload(**overrides):
    payload = {
        "first_name": "Ana",
        "last_name": "Cruz",
        "username": "acruz",
        "email": "ana.cruz@test.com",
        "password": "s3cret-pass",
        "role_id": ROLE_EMPLOYEE,
        "department_id": DEPARTMENT_ENGINEERING,
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_user(client, login_as, auth_headers, user_directory):
    login_as(AuthUserFactory.create(role_id=ROLE_ADMIN))

    response = await client.post("/users", json=_new_user_payload(), headers=auth_headers)

    assert response.status_code == 201
    body = response.json()
    assert body["email"] == "ana.cruz@test.com"
    assert body["username"] == "acruz"
    assert body["role_id"] == ROLE_EMPLOYEE
    assert "password" not in body

    stored = user_directory.users[body["id"]]
    assert stored.user_metadata["full_name"] == "Ana Cruz"
    assert stored.user_metadata["status"] == "active"
    assert stored.user_metadata["department_id"] == DEPARTMENT_ENGINEERING


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_user_accepts_dashboard_payload(
    client, login_as, auth_headers, user_directory
):
    """The dashboard form sends names and role in camelCase."""
    login_as(AuthUserFactory.create(role_id=ROLE_ADMIN))

    response = await client.post(
        "/users",
        json={
            "firstName": "Ana",
            "lastName": "Cruz",
            "username": "ana",
            "email": "ana@test.com",
            "password": "s3cret-pass",
            "roleId": 2,
            "department_id": 1,
        },
        headers=auth_headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["first_name"] == "Ana"
    assert body["role_id"] == 2
    assert body["department_id"] == 1

    metadata = user_directory.users[body["id"]].user_metadata
    assert metadata["full_name"] == "Ana Cruz"
    assert metadata["role_id"] == 2
    assert metadata["department_id"] == 1


@pytest.mark.asyncio
@pytest.mark.integration
async def test_update_user_accepts_camel_case_fields(
    client, login_as, auth_headers, user_directory
):
    user = DirectoryUserFactory.create()
    user_directory.users[user.id] = user
    login_as(AuthUserFactory.create(role_id=ROLE_ADMIN))

    response = await client.put(
        f"/users/{user.id}",
        json={
            "firstName": "Dana",
            "lastName": "Reyes",
            "username": "dreyes",
            "roleId": ROLE_ADMIN,
        },
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json()["full_name"] == "Dana Reyes"
    assert response.json()["role_id"] == ROLE_ADMIN


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_user_requires_authentication(client, user_directory):
    response = await client.post("/users", json=_new_user_payload())

    assert response.status_code == 401
    assert user_directory.users == {}


@pytest.mark.asyncio
@pytest.mark.integration
@pytest.mark.parametrize(
    "overrides",
    [{"email": "not-an-email"}, {"password": "short"}, {"first_name": ""}],
)
async def test_create_user_validation(client, login_as, auth_headers, overrides):
    login_as(AuthUserFactory.create(role_id=ROLE_ADMIN))

    response = await client.post(
        "/users", json=_new_user_payload(**overrides), headers=auth_headers
    )

    assert response.status_code == 422


@pytest.mark.asyncio
@pytest.mark.integration
async def test_list_users_adds_role_name(
    client, login_as, auth_headers, user_directory, organization_store
):
    organization_store.roles = [
        RoleFactory.create(id=ROLE_EMPLOYEE, name="Employee"),
        RoleFactory.create(id=ROLE_ADMIN, name="Administrator"),
    ]
    employee = DirectoryUserFactory.create()
    unassigned = DirectoryUserFactory.create(user_metadata={"full_name": "No Role"})
    user_directory.users = {employee.id: employee, unassigned.id: unassigned}
    login_as(AuthUserFactory.create(role_id=ROLE_ADMIN))

    response = await client.get("/users", headers=auth_headers)

    assert response.status_code == 200
    by_id = {item["id"]: item for item in response.json()}
    assert by_id[employee.id]["user_metadata"]["role_name"] == "Employee"
    assert by_id[unassigned.id]["user_metadata"]["role_name"] is None


@pytest.mark.asyncio
@pytest.mark.integration
async def test_get_user_flattens_metadata(
    client, login_as, auth_headers, user_directory
):
    user = DirectoryUserFactory.create(
        user_metadata={
            "first_name": "Ben",
            "last_name": "Lim",
            "full_name": "Ben Lim",
            "role_id": ROLE_EMPLOYEE,
            # Metadata must not override the identity fields
            "email": "stale@test.com",
        }
    )
    user_directory.users[user.id] = user
    login_as(AuthUserFactory.create())

    response = await client.get(f"/users/{user.id}", headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == user.id
    assert body["email"] == user.email
    assert body["first_name"] == "Ben"
    assert body["role_id"] == ROLE_EMPLOYEE


@pytest.mark.asyncio
@pytest.mark.integration
async def test_get_unknown_user(client, login_as, auth_headers):
    login_as(AuthUserFactory.create())

    response = await client.get("/users/does-not-exist", headers=auth_headers)

    assert response.status_code == 404


@pytest.mark.asyncio
@pytest.mark.integration
async def test_update_user_recomputes_full_name(
    client, login_as, auth_headers, user_directory
):
    user = DirectoryUserFactory.create()
    user_directory.users[user.id] = user
    login_as(AuthUserFactory.create(role_id=ROLE_ADMIN))

    response = await client.put(
        f"/users/{user.id}",
        json={
            "first_name": "Carla",
            "last_name": "Diaz",
            "username": "cdiaz",
            "email": "carla@test.com",
            "role_id": ROLE_ADMIN,
        },
        headers=auth_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["full_name"] == "Carla Diaz"
    assert body["email"] == "carla@test.com"
    assert body["role_id"] == ROLE_ADMIN
    # Department is kept when not supplied
    assert body["department_id"] == DEPARTMENT_ENGINEERING


@pytest.mark.asyncio
@pytest.mark.integration
async def test_delete_user(client, login_as, auth_headers, user_directory):
    user = DirectoryUserFactory.create()
    user_directory.users[user.id] = user
    login_as(AuthUserFactory.create(role_id=ROLE_ADMIN))

    response = await client.delete(f"/users/{user.id}", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"message": "User deleted successfully"}
    assert user.id not in user_directory.users


@pytest.mark.asyncio
@pytest.mark.integration
async def test_roles_filtered_by_department(client, organization_store):
    organization_store.roles = [
        RoleFactory.create(id=1, name="Manager", department_id=DEPARTMENT_ENGINEERING),
        RoleFactory.create(id=2, name="Clerk", department_id=99),
        RoleFactory.create(id=3, name="Engineer", department_id=DEPARTMENT_ENGINEERING),
    ]

    everything = await client.get("/users/roles")
    filtered = await client.get(
        "/users/roles", params={"departmentId": DEPARTMENT_ENGINEERING}
    )

    assert [role["name"] for role in everything.json()] == [
        "Clerk",
        "Engineer",
        "Manager",
    ]
    assert [role["name"] for role in filtered.json()] == ["Engineer", "Manager"]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_list_departments(client, login_as, auth_headers, organization_store):
    organization_store.departments = [
        DepartmentFactory.create(id=2, name="Sales"),
        DepartmentFactory.create(id=1, name="Engineering"),
    ]
    login_as(AuthUserFactory.create())

    response = await client.get("/users/departments/list", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == [
        {"id": 1, "name": "Engineering"},
        {"id": 2, "name": "Sales"},
    ]
