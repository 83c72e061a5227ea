from uuid import uuid4

import pytest

from src.app.errors import LIMIT_EXCEEDED, NOT_FOUND
from src.app.services.tenant_limit_guard import BoundedResource, TenantLimitGuard


@pytest.mark.asyncio
async def test_under_limit_returns_locked_tenant(mock_uow, tenant):
    mock_uow.tenants.get_by_id_for_update.return_value = tenant
    mock_uow.projects.count_by_tenant.return_value = 2

    result = await TenantLimitGuard(mock_uow).check_and_reserve(
        tenant.id, BoundedResource.projects
    )

    assert result.is_ok()
    assert result.value is tenant
    mock_uow.tenants.get_by_id_for_update.assert_awaited_once_with(tenant.id)
    mock_uow.projects.count_by_tenant.assert_awaited_once_with(tenant.id)


@pytest.mark.asyncio
async def test_at_limit_is_limit_exceeded_with_details(mock_uow, tenant):
    mock_uow.tenants.get_by_id_for_update.return_value = tenant
    mock_uow.users.count_by_tenant.return_value = 5

    result = await TenantLimitGuard(mock_uow).check_and_reserve(
        tenant.id, BoundedResource.users
    )

    assert result.is_err()
    assert result.error.code == LIMIT_EXCEEDED
    assert result.error.details == {"resource": "users", "current": 5, "limit": 5}
    assert result.error.message == "Users limit (5) reached for this tenant"


@pytest.mark.asyncio
async def test_unknown_tenant_is_not_found(mock_uow):
    mock_uow.tenants.get_by_id_for_update.return_value = None

    result = await TenantLimitGuard(mock_uow).check_and_reserve(
        uuid4(), BoundedResource.projects
    )

    assert result.is_err()
    assert result.error.code == NOT_FOUND
    mock_uow.projects.count_by_tenant.assert_not_awaited()
