import asyncio

import pytest
from httpx import AsyncClient

from tests.utils.api import API, bearer


@pytest.mark.asyncio
async def test_concurrent_project_creates_respect_limit(client: AsyncClient, acme):
    """
    Given a free tenant with room for 3 projects
    When 4 creates race
    Then exactly 3 succeed and the other hits LIMIT_EXCEEDED
    """
    limit = acme["tenant"]["max_projects"]

    responses = await asyncio.gather(
        *(
            client.post(
                f"{API}/projects", json={"name": f"P{i}"}, headers=bearer(acme["token"])
            )
            for i in range(limit + 1)
        )
    )

    codes = sorted(response.status_code for response in responses)
    assert codes == [201] * limit + [409]

    response = await client.get(f"{API}/projects", headers=bearer(acme["token"]))
    assert response.json()["total"] == limit


@pytest.mark.asyncio
async def test_concurrent_user_adds_respect_limit(client: AsyncClient, acme):
    # The admin already occupies one seat
    seats = acme["tenant"]["max_users"] - 1

    responses = await asyncio.gather(
        *(
            client.post(
                f"{API}/tenants/{acme['tenant']['id']}/users",
                json={
                    "email": f"racer{i}@acme.com",
                    "password": "MemberPass123",
                    "full_name": f"Racer {i}",
                },
                headers=bearer(acme["token"]),
            )
            for i in range(seats + 2)
        )
    )

    codes = sorted(response.status_code for response in responses)
    assert codes == [201] * seats + [409, 409]

    response = await client.get(
        f"{API}/tenants/{acme['tenant']['id']}", headers=bearer(acme["token"])
    )
    assert response.json()["total_users"] == acme["tenant"]["max_users"]
