"""
Get Tenant Use Case

Returns a tenant with its user, project and task totals.
"""

from uuid import UUID

from libs.result import Result, Return
from src.app.errors import not_found
from src.app.services.authorization import Action, TenantResource, ensure_allowed
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Tenant
from src.domain.principal import Principal
from .dtos import TenantDetailResponse, TenantResponse


async def build_tenant_detail(uow: UnitOfWork, tenant: Tenant) -> TenantDetailResponse:
    """Attach collection totals to a tenant (caller holds the unit of work)"""
    return TenantDetailResponse(
        **TenantResponse.from_entity(tenant).model_dump(),
        total_users=await uow.users.count_by_tenant(tenant.id),
        total_projects=await uow.projects.count_by_tenant(tenant.id),
        total_tasks=await uow.tasks.count_by_tenant(tenant.id),
    )


class GetTenantUseCase:
    """
    Use case for reading one tenant.

    Business Rules:
    - Super admin can read any tenant
    - Anyone else only their own tenant; other ids are NOT_FOUND
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, principal: Principal, tenant_id: UUID
    ) -> Result[TenantDetailResponse]:
        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if tenant is None or not principal.can_see_tenant(tenant.id):
                return Return.err(not_found("Tenant"))

            denied = ensure_allowed(
                principal, Action.view_tenant, TenantResource.of(tenant)
            )
            if denied:
                return Return.err(denied)

            return Return.ok(await build_tenant_detail(self.uow, tenant))
