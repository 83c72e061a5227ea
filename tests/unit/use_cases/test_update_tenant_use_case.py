from uuid import uuid4

import pytest

from src.app.errors import ACCESS_DENIED, NOT_FOUND, VALIDATION_ERROR
from src.app.use_cases.tenants import UpdateTenantCommand, UpdateTenantUseCase
from src.domain.entities import SubscriptionPlan, Tenant


@pytest.mark.asyncio
async def test_tenant_admin_renames_own_tenant(mock_uow, tenant, admin):
    mock_uow.tenants.get_by_id_for_update.return_value = tenant

    result = await UpdateTenantUseCase(mock_uow).execute(
        admin, tenant.id, UpdateTenantCommand(name="Acme Renamed")
    )

    assert result.is_ok()
    assert result.value.name == "Acme Renamed"
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_tenant_admin_sending_plan_is_denied_outright(mock_uow, tenant, admin):
    mock_uow.tenants.get_by_id_for_update.return_value = tenant

    result = await UpdateTenantUseCase(mock_uow).execute(
        admin, tenant.id, UpdateTenantCommand(name="Acme", subscription_plan="enterprise")
    )

    assert result.error.code == ACCESS_DENIED
    assert tenant.name == "Acme"
    mock_uow.tenants.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_plan_change_applies_plan_limits(mock_uow, tenant, super_admin):
    mock_uow.tenants.get_by_id_for_update.return_value = tenant
    mock_uow.users.count_by_tenant.return_value = 2
    mock_uow.projects.count_by_tenant.return_value = 1

    result = await UpdateTenantUseCase(mock_uow).execute(
        super_admin, tenant.id, UpdateTenantCommand(subscription_plan="pro")
    )

    assert result.is_ok()
    assert result.value.subscription_plan == SubscriptionPlan.pro.value
    assert (result.value.max_users, result.value.max_projects) == (25, 15)


@pytest.mark.asyncio
async def test_explicit_limits_win_over_plan_limits(mock_uow, tenant, super_admin):
    mock_uow.tenants.get_by_id_for_update.return_value = tenant
    mock_uow.users.count_by_tenant.return_value = 2
    mock_uow.projects.count_by_tenant.return_value = 1

    result = await UpdateTenantUseCase(mock_uow).execute(
        super_admin,
        tenant.id,
        UpdateTenantCommand(subscription_plan="pro", max_users=40),
    )

    assert (result.value.max_users, result.value.max_projects) == (40, 15)


@pytest.mark.asyncio
async def test_limit_below_current_count_is_rejected(mock_uow, tenant, super_admin):
    mock_uow.tenants.get_by_id_for_update.return_value = tenant
    mock_uow.projects.count_by_tenant.return_value = 3

    result = await UpdateTenantUseCase(mock_uow).execute(
        super_admin, tenant.id, UpdateTenantCommand(max_projects=2)
    )

    assert result.error.code == VALIDATION_ERROR
    assert result.error.details == {"field": "max_projects", "current": 3, "limit": 2}
    mock_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_other_tenant_is_not_found(mock_uow, tenant, admin):
    other = Tenant(id=uuid4(), name="Other", subdomain="other")
    mock_uow.tenants.get_by_id_for_update.return_value = other

    result = await UpdateTenantUseCase(mock_uow).execute(
        admin, other.id, UpdateTenantCommand(name="Mine now")
    )

    assert result.error.code == NOT_FOUND


@pytest.mark.asyncio
async def test_no_fields_to_update(mock_uow, tenant, admin):
    mock_uow.tenants.get_by_id_for_update.return_value = tenant

    result = await UpdateTenantUseCase(mock_uow).execute(
        admin, tenant.id, UpdateTenantCommand()
    )

    assert result.error.code == VALIDATION_ERROR
    assert result.error.message == "No fields to update"
