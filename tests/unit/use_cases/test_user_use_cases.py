from uuid import uuid4

import pytest

from src.app.errors import ACCESS_DENIED, CONFLICT, LIMIT_EXCEEDED, NOT_FOUND, VALIDATION_ERROR
from src.app.use_cases.tenants import AddUserCommand, AddUserUseCase
from src.app.use_cases.users import (
    DeleteUserUseCase,
    UpdateUserCommand,
    UpdateUserUseCase,
)
from src.domain.entities import User, UserRole


def make_user(tenant_id, user_id=None, role=UserRole.user) -> User:
    return User(
        id=user_id or uuid4(),
        tenant_id=tenant_id,
        email="someone@acme.com",
        password_hash="x",
        full_name="Someone",
        role=role,
    )


@pytest.mark.asyncio
async def test_delete_user_unassigns_tasks_before_delete(mock_uow, tenant, admin):
    user = make_user(tenant.id)
    mock_uow.users.get_by_id.return_value = user

    calls = []
    mock_uow.tasks.unassign_user.side_effect = lambda user_id: calls.append("unassign") or 3
    mock_uow.users.delete.side_effect = lambda entity: calls.append("delete")

    result = await DeleteUserUseCase(mock_uow).execute(admin, user.id)

    assert result.is_ok()
    assert result.value.tasks_unassigned == 3
    assert calls == ["unassign", "delete"]
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_self_delete_is_denied(mock_uow, tenant, admin):
    mock_uow.users.get_by_id.return_value = make_user(
        tenant.id, user_id=admin.user_id, role=UserRole.tenant_admin
    )

    result = await DeleteUserUseCase(mock_uow).execute(admin, admin.user_id)

    assert result.error.code == ACCESS_DENIED
    mock_uow.tasks.unassign_user.assert_not_awaited()
    mock_uow.users.delete.assert_not_awaited()


@pytest.mark.asyncio
async def test_delete_foreign_user_is_not_found(mock_uow, admin):
    mock_uow.users.get_by_id.return_value = make_user(uuid4())

    result = await DeleteUserUseCase(mock_uow).execute(admin, uuid4())

    assert result.error.code == NOT_FOUND


@pytest.mark.asyncio
async def test_self_can_rename(mock_uow, tenant, member):
    mock_uow.users.get_by_id.return_value = make_user(tenant.id, user_id=member.user_id)

    result = await UpdateUserUseCase(mock_uow).execute(
        member, member.user_id, UpdateUserCommand(full_name="  New Name ")
    )

    assert result.is_ok()
    assert result.value.full_name == "New Name"


@pytest.mark.asyncio
async def test_self_deactivation_is_denied(mock_uow, tenant, admin):
    mock_uow.users.get_by_id.return_value = make_user(
        tenant.id, user_id=admin.user_id, role=UserRole.tenant_admin
    )

    result = await UpdateUserUseCase(mock_uow).execute(
        admin, admin.user_id, UpdateUserCommand(is_active=False)
    )

    assert result.error.code == ACCESS_DENIED
    mock_uow.users.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_admin_cannot_grant_super_admin(mock_uow, tenant, admin):
    mock_uow.users.get_by_id.return_value = make_user(tenant.id)

    result = await UpdateUserUseCase(mock_uow).execute(
        admin, uuid4(), UpdateUserCommand(role="super_admin")
    )

    assert result.error.code == VALIDATION_ERROR


@pytest.mark.asyncio
async def test_add_user_defaults_to_user_role(mock_uow, tenant, admin):
    mock_uow.tenants.get_by_id.return_value = tenant
    mock_uow.tenants.get_by_id_for_update.return_value = tenant
    mock_uow.users.count_by_tenant.return_value = 1
    mock_uow.users.get_by_tenant_and_email.return_value = None

    result = await AddUserUseCase(mock_uow).execute(
        admin,
        tenant.id,
        AddUserCommand(email="New@Acme.com", password="SecurePass123", full_name="New"),
    )

    assert result.is_ok()
    assert result.value.role == "user"
    assert result.value.email == "new@acme.com"
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_add_user_at_limit(mock_uow, tenant, admin):
    mock_uow.tenants.get_by_id.return_value = tenant
    mock_uow.tenants.get_by_id_for_update.return_value = tenant
    mock_uow.users.count_by_tenant.return_value = tenant.max_users

    result = await AddUserUseCase(mock_uow).execute(
        admin,
        tenant.id,
        AddUserCommand(email="new@acme.com", password="SecurePass123", full_name="New"),
    )

    assert result.error.code == LIMIT_EXCEEDED
    mock_uow.users.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_add_user_duplicate_email(mock_uow, tenant, admin):
    mock_uow.tenants.get_by_id.return_value = tenant
    mock_uow.tenants.get_by_id_for_update.return_value = tenant
    mock_uow.users.count_by_tenant.return_value = 1
    mock_uow.users.get_by_tenant_and_email.return_value = make_user(tenant.id)

    result = await AddUserUseCase(mock_uow).execute(
        admin,
        tenant.id,
        AddUserCommand(email="someone@acme.com", password="SecurePass123", full_name="X"),
    )

    assert result.error.code == CONFLICT


@pytest.mark.asyncio
async def test_add_super_admin_role_is_rejected(mock_uow, tenant, admin):
    mock_uow.tenants.get_by_id.return_value = tenant

    result = await AddUserUseCase(mock_uow).execute(
        admin,
        tenant.id,
        AddUserCommand(
            email="x@acme.com", password="SecurePass123", full_name="X", role="super_admin"
        ),
    )

    assert result.error.code == VALIDATION_ERROR
    mock_uow.tenants.get_by_id_for_update.assert_not_awaited()
