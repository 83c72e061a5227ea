from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from src.domain.entities import AuditEvent


class IAuditEventRepository(ABC):
    """AuditEvent repository interface - application layer"""

    @abstractmethod
    async def create(self, audit_event: AuditEvent) -> AuditEvent:
        """Create a new audit event (immutable)"""
        pass

    @abstractmethod
    async def list_recent_by_tenant(
        self, tenant_id: UUID, limit: int = 50
    ) -> List[AuditEvent]:
        """Get the newest audit events of a tenant, ordered by created_at DESC"""
        pass
