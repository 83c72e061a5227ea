import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from src.adapter.repositories.project_repository import ProjectRepository
from tests.utils.api import API, bearer, create_project, create_task


@pytest.mark.asyncio
async def test_create_and_get_project(client: AsyncClient, acme, test_data):
    """
    Given a tenant admin
    When a project is created and read back
    Then it is active and owned by the admin's tenant
    """
    payload = test_data.get_copy("project_alpha")

    created = await create_project(client, acme["token"], **payload)

    response = await client.get(
        f"{API}/projects/{created['id']}", headers=bearer(acme["token"])
    )
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Alpha"
    assert data["description"] == "desc"
    assert data["status"] == "active"
    assert data["tenant_id"] == acme["tenant"]["id"]
    assert data["created_by"] == acme["admin"]["id"]


@pytest.mark.asyncio
async def test_project_limit_on_free_plan(client: AsyncClient, acme):
    for name in ("One", "Two", "Three"):
        await create_project(client, acme["token"], name)

    response = await client.post(
        f"{API}/projects", json={"name": "Four"}, headers=bearer(acme["token"])
    )

    assert response.status_code == 409
    error = response.json()["error"]
    assert error["code"] == "LIMIT_EXCEEDED"
    assert error["details"] == {"resource": "projects", "current": 3, "limit": 3}


@pytest.mark.asyncio
async def test_member_cannot_create_project(client: AsyncClient, acme_member):
    response = await client.post(
        f"{API}/projects", json={"name": "Nope"}, headers=bearer(acme_member["token"])
    )

    assert response.status_code == 403
    assert response.json()["error"]["message"] == "Access denied"


@pytest.mark.asyncio
async def test_blank_project_name_rejected(client: AsyncClient, acme):
    response = await client.post(
        f"{API}/projects", json={"name": "   "}, headers=bearer(acme["token"])
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_other_tenant_project_is_not_found(client: AsyncClient, acme, globex):
    project = await create_project(client, globex["token"], "Secret")

    for method in ("get", "delete"):
        response = await getattr(client, method)(
            f"{API}/projects/{project['id']}", headers=bearer(acme["token"])
        )
        assert response.status_code == 404

    response = await client.put(
        f"{API}/projects/{project['id']}",
        json={"name": "Mine now"},
        headers=bearer(acme["token"]),
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_unknown_project_is_not_found(client: AsyncClient, acme):
    response = await client.get(
        f"{API}/projects/00000000-0000-0000-0000-000000000000",
        headers=bearer(acme["token"]),
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_list_projects_is_tenant_scoped(client: AsyncClient, acme, globex):
    alpha = await create_project(client, acme["token"], "Alpha")
    await create_task(client, acme["token"], alpha["id"], "One")
    await create_task(client, acme["token"], alpha["id"], "Two")
    await create_project(client, globex["token"], "Globex Plan")

    response = await client.get(f"{API}/projects", headers=bearer(acme["token"]))

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 1
    assert data["projects"][0]["name"] == "Alpha"
    assert data["projects"][0]["task_count"] == 2


@pytest.mark.asyncio
async def test_super_admin_lists_all_projects(
    client: AsyncClient, acme, globex, super_admin_token
):
    await create_project(client, acme["token"], "Alpha")
    await create_project(client, globex["token"], "Globex Plan")

    response = await client.get(f"{API}/projects", headers=bearer(super_admin_token))

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    assert {p["tenant_subdomain"] for p in data["projects"]} == {"acme", "globex"}


@pytest.mark.asyncio
async def test_update_project_status(client: AsyncClient, acme):
    project = await create_project(client, acme["token"], "Alpha")

    response = await client.put(
        f"{API}/projects/{project['id']}",
        json={"status": "archived"},
        headers=bearer(acme["token"]),
    )
    assert response.status_code == 200
    assert response.json()["status"] == "archived"

    response = await client.put(
        f"{API}/projects/{project['id']}",
        json={"status": "paused"},
        headers=bearer(acme["token"]),
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_delete_project_cascades_tasks(client: AsyncClient, acme):
    project = await create_project(client, acme["token"], "Alpha")
    task = await create_task(client, acme["token"], project["id"], "Doomed")
    await create_task(client, acme["token"], project["id"], "Also doomed")

    response = await client.delete(
        f"{API}/projects/{project['id']}", headers=bearer(acme["token"])
    )

    assert response.status_code == 200
    assert response.json() == {"status": "deleted", "tasks_deleted": 2}

    response = await client.put(
        f"{API}/tasks/{task['id']}", json={"title": "Ghost"}, headers=bearer(acme["token"])
    )
    assert response.status_code == 404

    response = await client.get(
        f"{API}/tenants/{acme['tenant']['id']}", headers=bearer(acme["token"])
    )
    assert response.json()["total_tasks"] == 0


@pytest.mark.asyncio
async def test_member_cannot_delete_project(client: AsyncClient, acme, acme_member):
    project = await create_project(client, acme["token"], "Alpha")

    response = await client.delete(
        f"{API}/projects/{project['id']}", headers=bearer(acme_member["token"])
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_failed_project_delete_keeps_tasks(client: AsyncClient, acme, monkeypatch):
    """
    Given a project with a task
    When the project row delete fails in the store
    Then the request answers 500 and the task delete is rolled back
    """
    project = await create_project(client, acme["token"], "Alpha")
    await create_task(client, acme["token"], project["id"], "Survivor")

    async def failing_delete(self, project):
        raise OperationalError("DELETE FROM projects", {}, Exception("disk I/O error"))

    monkeypatch.setattr(ProjectRepository, "delete", failing_delete)

    response = await client.delete(
        f"{API}/projects/{project['id']}", headers=bearer(acme["token"])
    )

    assert response.status_code == 500
    assert response.json()["error"]["code"] == "STORE_FAILURE"

    response = await client.get(
        f"{API}/projects/{project['id']}/tasks", headers=bearer(acme["token"])
    )
    assert [task["title"] for task in response.json()["tasks"]] == ["Survivor"]


@pytest.mark.asyncio
async def test_search_wildcards_match_literally(client: AsyncClient, acme):
    await create_project(client, acme["token"], "Alpha")
    await create_project(client, acme["token"], "beta_plan")
    await create_project(client, acme["token"], "100% done")

    cases = [("_", ["beta_plan"]), ("%", ["100% done"]), ("ALP", ["Alpha"])]
    for term, expected in cases:
        response = await client.get(
            f"{API}/projects", params={"search": term}, headers=bearer(acme["token"])
        )
        assert [p["name"] for p in response.json()["projects"]] == expected
