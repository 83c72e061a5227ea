"""
Tenant Limit Guard

Keeps each tenant's users and projects within its plan ceilings. The check
must run inside the same unit of work as the insert it admits: the tenant row
is locked first, so a concurrent create for the same tenant waits until this
transaction commits or rolls back and then sees the new count.
"""

import logging
from enum import Enum
from uuid import UUID

from libs.result import Result, Return
from src.app.errors import limit_exceeded, not_found
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Tenant

logger = logging.getLogger(__name__)


class BoundedResource(str, Enum):
    """Tenant collections with a plan ceiling"""

    users = "users"
    projects = "projects"


class TenantLimitGuard:
    """
    Check-then-reserve for bounded tenant collections.

    Usage (inside ``async with uow``)::

        result = await TenantLimitGuard(uow).check_and_reserve(tenant_id, BoundedResource.projects)
        if result.is_err():
            return result      # nothing inserted, uow rolls back on exit
        await uow.projects.create(project)
        await uow.commit()

    The row lock is held until the caller commits, so the insert that follows
    is covered by the same serialization point.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def check_and_reserve(
        self, tenant_id: UUID, resource: BoundedResource
    ) -> Result[Tenant]:
        """
        Lock the tenant, count the collection and compare with its limit.

        Args:
            tenant_id: Tenant receiving the new row
            resource: Which collection is growing

        Returns:
            Result with the locked Tenant, or NOT_FOUND / LIMIT_EXCEEDED
        """
        tenant = await self.uow.tenants.get_by_id_for_update(tenant_id)
        if tenant is None:
            return Return.err(not_found("Tenant"))

        if resource == BoundedResource.users:
            limit = tenant.max_users
            current = await self.uow.users.count_by_tenant(tenant_id)
        else:
            limit = tenant.max_projects
            current = await self.uow.projects.count_by_tenant(tenant_id)

        if current >= limit:
            logger.info(
                "Tenant %s reached its %s limit (%d/%d)",
                tenant_id,
                resource.value,
                current,
                limit,
            )
            return Return.err(limit_exceeded(resource.value, current, limit))

        return Return.ok(tenant)
