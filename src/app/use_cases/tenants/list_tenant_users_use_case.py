"""
List Tenant Users Use Case
"""

from typing import List, Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.errors import invalid_choice, not_found
from src.app.services.authorization import Action, TenantResource, ensure_allowed
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.users.dtos import UserResponse
from src.domain.entities import UserRole
from src.domain.principal import Principal


class ListTenantUsersUseCase:
    """
    Use case for listing the users of a tenant.

    Business Rules:
    - Any member of the tenant, or the super admin
    - Optional search over email and full name, optional role filter
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        principal: Principal,
        tenant_id: UUID,
        search: Optional[str] = None,
        role: Optional[str] = None,
    ) -> Result[List[UserResponse]]:
        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if tenant is None or not principal.can_see_tenant(tenant.id):
                return Return.err(not_found("Tenant"))

            denied = ensure_allowed(
                principal, Action.list_tenant_users, TenantResource.of(tenant)
            )
            if denied:
                return Return.err(denied)

            role_filter = None
            if role:
                try:
                    role_filter = UserRole(role)
                except ValueError:
                    return Return.err(invalid_choice("role", UserRole))

            users = await self.uow.users.list_by_tenant(
                tenant.id, search=search or None, role=role_filter
            )
            return Return.ok([UserResponse.from_entity(user) for user in users])
