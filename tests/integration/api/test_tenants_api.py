import pytest
from httpx import AsyncClient

from tests.utils.api import API, bearer, create_project, create_task


@pytest.mark.asyncio
async def test_get_own_tenant_with_totals(client: AsyncClient, acme, acme_member):
    project = await create_project(client, acme["token"], "Alpha")
    await create_task(client, acme["token"], project["id"], "First")

    response = await client.get(
        f"{API}/tenants/{acme['tenant']['id']}", headers=bearer(acme_member["token"])
    )

    assert response.status_code == 200
    data = response.json()
    assert data["total_users"] == 2
    assert data["total_projects"] == 1
    assert data["total_tasks"] == 1


@pytest.mark.asyncio
async def test_foreign_tenant_is_not_found(client: AsyncClient, acme, globex):
    response = await client.get(
        f"{API}/tenants/{globex['tenant']['id']}", headers=bearer(acme["token"])
    )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_tenant_admin_cannot_change_plan(client: AsyncClient, acme):
    response = await client.put(
        f"{API}/tenants/{acme['tenant']['id']}",
        json={"name": "Acme 2", "subscription_plan": "enterprise"},
        headers=bearer(acme["token"]),
    )

    assert response.status_code == 403
    assert response.json()["error"] == {"code": "ACCESS_DENIED", "message": "Access denied"}

    # Nothing was applied, not even the name
    response = await client.get(
        f"{API}/tenants/{acme['tenant']['id']}", headers=bearer(acme["token"])
    )
    assert response.json()["name"] == "Acme Corp"


@pytest.mark.asyncio
async def test_super_admin_plan_change_applies_limits(
    client: AsyncClient, acme, super_admin_token
):
    response = await client.put(
        f"{API}/tenants/{acme['tenant']['id']}",
        json={"subscription_plan": "pro"},
        headers=bearer(super_admin_token),
    )

    assert response.status_code == 200
    data = response.json()
    assert data["subscription_plan"] == "pro"
    assert data["max_users"] == 25
    assert data["max_projects"] == 15


@pytest.mark.asyncio
async def test_limits_cannot_drop_below_current_count(
    client: AsyncClient, acme, acme_member, super_admin_token
):
    response = await client.put(
        f"{API}/tenants/{acme['tenant']['id']}",
        json={"max_users": 1},
        headers=bearer(super_admin_token),
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_list_tenants_super_admin_only(
    client: AsyncClient, acme, globex, super_admin_token
):
    response = await client.get(f"{API}/tenants", headers=bearer(acme["token"]))
    assert response.status_code == 403

    response = await client.get(f"{API}/tenants", headers=bearer(super_admin_token))
    assert response.status_code == 200
    assert response.json()["total"] == 2

    response = await client.get(
        f"{API}/tenants", params={"status": "active"}, headers=bearer(super_admin_token)
    )
    assert {t["subdomain"] for t in response.json()["tenants"]} == {"acme", "globex"}


@pytest.mark.asyncio
async def test_user_limit_is_enforced(client: AsyncClient, acme):
    # Free plan: the admin plus four more fill the tenant
    for index in range(4):
        response = await client.post(
            f"{API}/tenants/{acme['tenant']['id']}/users",
            json={
                "email": f"user{index}@acme.com",
                "password": "MemberPass123",
                "full_name": f"User {index}",
            },
            headers=bearer(acme["token"]),
        )
        assert response.status_code == 201, response.text

    response = await client.post(
        f"{API}/tenants/{acme['tenant']['id']}/users",
        json={"email": "late@acme.com", "password": "MemberPass123", "full_name": "Late"},
        headers=bearer(acme["token"]),
    )

    assert response.status_code == 409
    error = response.json()["error"]
    assert error["code"] == "LIMIT_EXCEEDED"
    assert error["details"] == {"resource": "users", "current": 5, "limit": 5}


@pytest.mark.asyncio
async def test_add_user_duplicate_email_conflicts(client: AsyncClient, acme):
    response = await client.post(
        f"{API}/tenants/{acme['tenant']['id']}/users",
        json={"email": "ADMIN@acme.com", "password": "MemberPass123", "full_name": "Dup"},
        headers=bearer(acme["token"]),
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "CONFLICT"


@pytest.mark.asyncio
async def test_same_email_allowed_in_another_tenant(client: AsyncClient, acme, globex):
    response = await client.post(
        f"{API}/tenants/{globex['tenant']['id']}/users",
        json={"email": "admin@acme.com", "password": "MemberPass123", "full_name": "Twin"},
        headers=bearer(globex["token"]),
    )

    assert response.status_code == 201


@pytest.mark.asyncio
async def test_member_cannot_add_users(client: AsyncClient, acme, acme_member):
    response = await client.post(
        f"{API}/tenants/{acme['tenant']['id']}/users",
        json={"email": "x@acme.com", "password": "MemberPass123", "full_name": "X"},
        headers=bearer(acme_member["token"]),
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_list_tenant_users_search_and_role(client: AsyncClient, acme, acme_member):
    tenant_id = acme["tenant"]["id"]

    response = await client.get(
        f"{API}/tenants/{tenant_id}/users",
        params={"search": "MEMBER"},
        headers=bearer(acme["token"]),
    )
    assert [u["email"] for u in response.json()["users"]] == ["member@acme.com"]

    response = await client.get(
        f"{API}/tenants/{tenant_id}/users",
        params={"role": "tenant_admin"},
        headers=bearer(acme_member["token"]),
    )
    assert [u["email"] for u in response.json()["users"]] == ["admin@acme.com"]
