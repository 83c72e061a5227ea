"""
Update Tenant Use Case

Renames a tenant, or (super admin) changes its status, plan and limits.
"""

import logging
from datetime import datetime
from typing import Any, Dict
from uuid import UUID

from libs.result import Result, Return
from src.app.errors import invalid_choice, not_found, validation_error
from src.app.services.audit import record_audit
from src.app.services.authorization import Action, TenantResource, ensure_allowed
from src.app.services.unit_of_work import UnitOfWork
from src.app.validators import is_blank
from src.domain.entities import (
    AuditAction,
    SubscriptionPlan,
    Tenant,
    TenantStatus,
    limits_for,
)
from src.domain.principal import Principal
from .dtos import TenantResponse, UpdateTenantCommand

logger = logging.getLogger(__name__)


class UpdateTenantUseCase:
    """
    Use case for updating a tenant.

    Business Rules:
    - Tenant admin may change the name of their own tenant only
    - status, subscription_plan, max_users, max_projects: super admin only
      (a tenant admin sending any of them is denied outright)
    - Changing the plan without explicit limits applies the plan's limits
    - Limits are positive and never below the tenant's current counts
    - The tenant row is locked so limits cannot move under a concurrent create
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, principal: Principal, tenant_id: UUID, command: UpdateTenantCommand
    ) -> Result[TenantResponse]:
        """
        Execute update tenant use case.

        Args:
            principal: Caller
            tenant_id: Tenant to update
            command: Fields to change (only explicitly set fields count)

        Returns:
            Result with the updated TenantResponse, or Error
        """
        changes = command.model_dump(exclude_unset=True)

        async with self.uow:
            tenant = await self.uow.tenants.get_by_id_for_update(tenant_id)
            if tenant is None or not principal.can_see_tenant(tenant.id):
                return Return.err(not_found("Tenant"))

            denied = ensure_allowed(
                principal, Action.update_tenant, TenantResource.of(tenant), changes
            )
            if denied:
                return Return.err(denied)

            if not changes:
                return Return.err(validation_error("No fields to update"))

            applied = await self._apply(tenant, changes)
            if applied.is_err():
                return applied

            tenant.updated_at = datetime.utcnow()
            tenant = await self.uow.tenants.update(tenant)

            await record_audit(
                self.uow,
                AuditAction.update_tenant,
                tenant_id=tenant.id,
                user_id=principal.user_id,
                entity_type="tenant",
                entity_id=tenant.id,
                metadata=applied.value,
            )
            await self.uow.commit()

            logger.info("Tenant %s updated by %s", tenant.id, principal.user_id)

            return Return.ok(TenantResponse.from_entity(tenant))

    async def _apply(
        self, tenant: Tenant, changes: Dict[str, Any]
    ) -> Result[Dict[str, Any]]:
        """Validate and set the requested fields, returning what changed"""
        applied: Dict[str, Any] = {}

        if "name" in changes:
            if is_blank(changes["name"]):
                return Return.err(validation_error("name cannot be empty"))
            tenant.name = changes["name"].strip()
            applied["name"] = tenant.name

        if "status" in changes:
            try:
                tenant.status = TenantStatus(changes["status"])
            except ValueError:
                return Return.err(invalid_choice("status", TenantStatus))
            applied["status"] = tenant.status.value

        max_users = changes.get("max_users")
        max_projects = changes.get("max_projects")

        if "subscription_plan" in changes:
            try:
                plan = SubscriptionPlan(changes["subscription_plan"])
            except ValueError:
                return Return.err(invalid_choice("subscription_plan", SubscriptionPlan))
            if plan != tenant.subscription_plan:
                limits = limits_for(plan)
                if max_users is None:
                    max_users = limits["max_users"]
                if max_projects is None:
                    max_projects = limits["max_projects"]
            tenant.subscription_plan = plan
            applied["subscription_plan"] = plan.value

        if max_users is not None:
            current = await self.uow.users.count_by_tenant(tenant.id)
            error = _check_limit("max_users", max_users, current)
            if error:
                return Return.err(error)
            tenant.max_users = max_users
            applied["max_users"] = max_users

        if max_projects is not None:
            current = await self.uow.projects.count_by_tenant(tenant.id)
            error = _check_limit("max_projects", max_projects, current)
            if error:
                return Return.err(error)
            tenant.max_projects = max_projects
            applied["max_projects"] = max_projects

        return Return.ok(applied)


def _check_limit(field: str, value: int, current: int):
    if value < 1:
        return validation_error(f"{field} must be a positive integer")
    if value < current:
        return validation_error(
            f"{field} cannot be lower than the current count ({current})",
            {"field": field, "current": current, "limit": value},
        )
    return None
