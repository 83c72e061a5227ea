"""
Tenant Use Case DTOs (Data Transfer Objects)

All Command and Response classes for tenant domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.domain.entities import Tenant


# ============================================================================
# Command DTOs
# ============================================================================


class UpdateTenantCommand(BaseModel):
    """
    Update tenant command.

    Only fields explicitly set by the caller are applied
    (``model_dump(exclude_unset=True)``).
    """

    name: Optional[str] = None
    status: Optional[str] = None
    subscription_plan: Optional[str] = None
    max_users: Optional[int] = None
    max_projects: Optional[int] = None


class AddUserCommand(BaseModel):
    """Add user to tenant command"""

    email: str
    password: str
    full_name: str
    role: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class TenantResponse(BaseModel):
    """Tenant state"""

    id: str
    name: str
    subdomain: str
    status: str
    subscription_plan: str
    max_users: int
    max_projects: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, tenant: Tenant) -> "TenantResponse":
        return cls(
            id=str(tenant.id),
            name=tenant.name,
            subdomain=tenant.subdomain,
            status=tenant.status.value,
            subscription_plan=tenant.subscription_plan.value,
            max_users=tenant.max_users,
            max_projects=tenant.max_projects,
            created_at=tenant.created_at,
            updated_at=tenant.updated_at,
        )


class TenantDetailResponse(TenantResponse):
    """Tenant state with collection totals"""

    total_users: int
    total_projects: int
    total_tasks: int
