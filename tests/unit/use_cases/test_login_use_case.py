from uuid import uuid4

import pytest

from src.api.utils.jwt import verify_jwt
from src.app.errors import INVALID_CREDENTIALS, NOT_FOUND, TENANT_INACTIVE, USER_INACTIVE
from src.app.services.password import hash_password
from src.app.use_cases.auth import LoginCommand, LoginUseCase
from src.domain.entities import TenantStatus, User, UserRole

PASSWORD = "SecurePass123"


def make_user(tenant_id, role=UserRole.user, is_active=True) -> User:
    return User(
        id=uuid4(),
        tenant_id=tenant_id,
        email="user@acme.com",
        password_hash=hash_password(PASSWORD),
        full_name="User",
        role=role,
        is_active=is_active,
    )


@pytest.mark.asyncio
async def test_tenant_login_issues_scoped_token(mock_uow, tenant):
    user = make_user(tenant.id)
    mock_uow.tenants.get_by_subdomain.return_value = tenant
    mock_uow.users.get_by_tenant_and_email.return_value = user

    result = await LoginUseCase(mock_uow).execute(
        LoginCommand(email="User@Acme.com", password=PASSWORD, tenant_subdomain="ACME")
    )

    assert result.is_ok()
    claims = verify_jwt(result.value.token)
    assert claims["user_id"] == str(user.id)
    assert claims["tenant_id"] == str(tenant.id)
    assert claims["role"] == "user"
    assert result.value.tenant.subdomain == "acme"
    mock_uow.tenants.get_by_subdomain.assert_awaited_once_with("acme")
    mock_uow.users.get_by_tenant_and_email.assert_awaited_once_with(
        tenant.id, "user@acme.com"
    )
    mock_uow.audit_events.create.assert_awaited_once()
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_super_admin_login_without_tenant(mock_uow):
    user = make_user(None, role=UserRole.super_admin)
    mock_uow.users.get_super_admin_by_email.return_value = user

    result = await LoginUseCase(mock_uow).execute(
        LoginCommand(email="user@acme.com", password=PASSWORD)
    )

    assert result.is_ok()
    assert verify_jwt(result.value.token)["tenant_id"] is None
    assert result.value.tenant is None


@pytest.mark.asyncio
async def test_wrong_password_and_unknown_user_look_the_same(mock_uow, tenant):
    mock_uow.tenants.get_by_subdomain.return_value = tenant
    mock_uow.users.get_by_tenant_and_email.return_value = make_user(tenant.id)
    wrong = await LoginUseCase(mock_uow).execute(
        LoginCommand(email="user@acme.com", password="WrongPass1", tenant_subdomain="acme")
    )

    mock_uow.users.get_by_tenant_and_email.return_value = None
    unknown = await LoginUseCase(mock_uow).execute(
        LoginCommand(email="nobody@acme.com", password=PASSWORD, tenant_subdomain="acme")
    )

    assert wrong.error == unknown.error
    assert wrong.error.code == INVALID_CREDENTIALS
    mock_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_unknown_tenant_is_not_found(mock_uow):
    mock_uow.tenants.get_by_subdomain.return_value = None

    result = await LoginUseCase(mock_uow).execute(
        LoginCommand(email="user@acme.com", password=PASSWORD, tenant_subdomain="nope")
    )

    assert result.error.code == NOT_FOUND


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [TenantStatus.suspended, TenantStatus.trial])
async def test_non_active_tenant_cannot_log_in(mock_uow, tenant, status):
    tenant.status = status
    mock_uow.tenants.get_by_id.return_value = tenant

    result = await LoginUseCase(mock_uow).execute(
        LoginCommand(email="user@acme.com", password=PASSWORD, tenant_id=str(tenant.id))
    )

    assert result.error.code == TENANT_INACTIVE
    mock_uow.users.get_by_tenant_and_email.assert_not_awaited()


@pytest.mark.asyncio
async def test_inactive_user_is_rejected(mock_uow, tenant):
    mock_uow.tenants.get_by_subdomain.return_value = tenant
    mock_uow.users.get_by_tenant_and_email.return_value = make_user(
        tenant.id, is_active=False
    )

    result = await LoginUseCase(mock_uow).execute(
        LoginCommand(email="user@acme.com", password=PASSWORD, tenant_subdomain="acme")
    )

    assert result.error.code == USER_INACTIVE
