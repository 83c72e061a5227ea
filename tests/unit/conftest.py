from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from src.domain.entities import Tenant, UserRole
from src.domain.principal import Principal


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with every repository method as an AsyncMock"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.tenants = AsyncMock()
    uow.users = AsyncMock()
    uow.projects = AsyncMock()
    uow.tasks = AsyncMock()
    uow.audit_events = AsyncMock()

    # Repositories echo back what they persist
    for repo in (uow.tenants, uow.users, uow.projects, uow.tasks):
        repo.create.side_effect = lambda entity: entity
        repo.update.side_effect = lambda entity: entity
    uow.audit_events.create.side_effect = lambda event: event

    return uow


@pytest.fixture
def tenant():
    return Tenant(id=uuid4(), name="Acme", subdomain="acme", max_users=5, max_projects=3)


@pytest.fixture
def admin(tenant):
    return Principal(user_id=uuid4(), tenant_id=tenant.id, role=UserRole.tenant_admin)


@pytest.fixture
def member(tenant):
    return Principal(user_id=uuid4(), tenant_id=tenant.id, role=UserRole.user)


@pytest.fixture
def super_admin():
    return Principal(user_id=uuid4(), tenant_id=None, role=UserRole.super_admin)
