"""
List Tenants Use Case

Platform-wide tenant listing for the super admin.
"""

from typing import List, Optional

from libs.result import Result, Return
from src.app.errors import invalid_choice
from src.app.services.authorization import Action, ensure_allowed
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import SubscriptionPlan, TenantStatus
from src.domain.principal import Principal
from .dtos import TenantDetailResponse
from .get_tenant_use_case import build_tenant_detail


class ListTenantsUseCase:
    """
    Use case for listing every tenant.

    Business Rules:
    - Super admin only
    - Optional status and plan filters
    - Newest tenant first, each with its totals
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        principal: Principal,
        status: Optional[str] = None,
        plan: Optional[str] = None,
    ) -> Result[List[TenantDetailResponse]]:
        denied = ensure_allowed(principal, Action.list_tenants_global)
        if denied:
            return Return.err(denied)

        status_filter = None
        if status:
            try:
                status_filter = TenantStatus(status)
            except ValueError:
                return Return.err(invalid_choice("status", TenantStatus))

        plan_filter = None
        if plan:
            try:
                plan_filter = SubscriptionPlan(plan)
            except ValueError:
                return Return.err(invalid_choice("subscription_plan", SubscriptionPlan))

        async with self.uow:
            tenants = await self.uow.tenants.list(status=status_filter, plan=plan_filter)
            return Return.ok(
                [await build_tenant_detail(self.uow, tenant) for tenant in tenants]
            )
