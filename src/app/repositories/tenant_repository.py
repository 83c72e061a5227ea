from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import SubscriptionPlan, Tenant, TenantStatus


class ITenantRepository(ABC):
    """Tenant repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, tenant_id: UUID) -> Optional[Tenant]:
        """Get tenant by ID"""
        pass

    @abstractmethod
    async def get_by_id_for_update(self, tenant_id: UUID) -> Optional[Tenant]:
        """Get tenant by ID and lock its row until the transaction ends"""
        pass

    @abstractmethod
    async def get_by_subdomain(self, subdomain: str) -> Optional[Tenant]:
        """Get tenant by subdomain (case-insensitive)"""
        pass

    @abstractmethod
    async def list(
        self,
        status: Optional[TenantStatus] = None,
        plan: Optional[SubscriptionPlan] = None,
    ) -> List[Tenant]:
        """List tenants, newest first"""
        pass

    @abstractmethod
    async def create(self, tenant: Tenant) -> Tenant:
        """Create a new tenant"""
        pass

    @abstractmethod
    async def update(self, tenant: Tenant) -> Tenant:
        """Update existing tenant"""
        pass
