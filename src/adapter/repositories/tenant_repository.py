from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.tenant_repository import ITenantRepository
from src.domain.entities import SubscriptionPlan, Tenant, TenantStatus


class TenantRepository(ITenantRepository):
    """Tenant repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, tenant_id: UUID) -> Optional[Tenant]:
        """Get tenant by ID"""
        stmt = select(Tenant).where(Tenant.id == tenant_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id_for_update(self, tenant_id: UUID) -> Optional[Tenant]:
        """
        Get tenant by ID holding a row lock (SELECT ... FOR UPDATE).

        Concurrent transactions creating users or projects for the same tenant
        queue here, so the count read after the lock is never stale. SQLite has
        no row locks; its engine begins every transaction with BEGIN IMMEDIATE
        instead (see src.adapter.database).
        """
        stmt = (
            select(Tenant)
            .where(Tenant.id == tenant_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_subdomain(self, subdomain: str) -> Optional[Tenant]:
        """Get tenant by subdomain (case-insensitive)"""
        stmt = select(Tenant).where(func.lower(Tenant.subdomain) == subdomain.lower())
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list(
        self,
        status: Optional[TenantStatus] = None,
        plan: Optional[SubscriptionPlan] = None,
    ) -> List[Tenant]:
        """List tenants, newest first"""
        stmt = select(Tenant)
        if status is not None:
            stmt = stmt.where(Tenant.status == status)
        if plan is not None:
            stmt = stmt.where(Tenant.subscription_plan == plan)
        stmt = stmt.order_by(col(Tenant.created_at).desc())
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, tenant: Tenant) -> Tenant:
        """Create a new tenant"""
        self.session.add(tenant)
        await self.session.flush()
        await self.session.refresh(tenant)
        return tenant

    async def update(self, tenant: Tenant) -> Tenant:
        """Update existing tenant"""
        self.session.add(tenant)
        await self.session.flush()
        await self.session.refresh(tenant)
        return tenant
