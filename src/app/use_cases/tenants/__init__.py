"""Tenant use cases"""

from .add_user_use_case import AddUserUseCase
from .dtos import (
    AddUserCommand,
    TenantDetailResponse,
    TenantResponse,
    UpdateTenantCommand,
)
from .get_tenant_use_case import GetTenantUseCase
from .list_tenant_users_use_case import ListTenantUsersUseCase
from .list_tenants_use_case import ListTenantsUseCase
from .update_tenant_use_case import UpdateTenantUseCase

__all__ = [
    "AddUserCommand",
    "AddUserUseCase",
    "GetTenantUseCase",
    "ListTenantUsersUseCase",
    "ListTenantsUseCase",
    "TenantDetailResponse",
    "TenantResponse",
    "UpdateTenantCommand",
    "UpdateTenantUseCase",
]
