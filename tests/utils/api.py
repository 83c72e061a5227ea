from httpx import AsyncClient

from config import ApplicationConfig

API = ApplicationConfig.API_PREFIX


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


async def register_tenant(client: AsyncClient, payload: dict) -> dict:
    response = await client.post(f"{API}/auth/register-tenant", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def login(client: AsyncClient, email: str, password: str, subdomain: str) -> str:
    response = await client.post(
        f"{API}/auth/login",
        json={"email": email, "password": password, "tenant_subdomain": subdomain},
    )
    assert response.status_code == 200, response.text
    return response.json()["token"]


async def create_project(client: AsyncClient, token: str, name: str, **extra) -> dict:
    response = await client.post(
        f"{API}/projects", json={"name": name, **extra}, headers=bearer(token)
    )
    assert response.status_code == 201, response.text
    return response.json()


async def create_task(
    client: AsyncClient, token: str, project_id: str, title: str, **extra
) -> dict:
    response = await client.post(
        f"{API}/projects/{project_id}/tasks",
        json={"title": title, **extra},
        headers=bearer(token),
    )
    assert response.status_code == 201, response.text
    return response.json()
