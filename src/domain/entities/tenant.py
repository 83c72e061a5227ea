"""
Tenant Entity

Represents an isolated company workspace.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import SubscriptionPlan, TenantStatus


class Tenant(SQLModel, table=True):
    """
    Tenant entity - isolated company workspace.

    Business Rules:
    - Subdomain is globally unique and stored lowercase
    - max_users / max_projects bound the tenant's collections
    - Only a super_admin may change status, plan or limits
    - Never hard-deleted
    """

    __tablename__ = "tenants"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    subdomain: str = Field(unique=True, index=True, max_length=63)

    status: TenantStatus = Field(default=TenantStatus.active)
    subscription_plan: SubscriptionPlan = Field(default=SubscriptionPlan.free)
    max_users: int = Field(default=5, gt=0)
    max_projects: int = Field(default=3, gt=0)

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_tenant_status", "status"),
        Index("idx_tenant_plan", "subscription_plan"),
    )
