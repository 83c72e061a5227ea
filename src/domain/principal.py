"""
Principal

The authenticated caller of a request, resolved from the bearer token and
passed explicitly into every use case.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from src.domain.entities.enums import UserRole


class Principal(BaseModel):
    """Immutable identity of the caller: who, in which tenant, with which role"""

    model_config = ConfigDict(frozen=True)

    user_id: UUID
    tenant_id: Optional[UUID] = None
    role: UserRole

    @property
    def is_super_admin(self) -> bool:
        return self.role == UserRole.super_admin

    def can_see_tenant(self, tenant_id: Optional[UUID]) -> bool:
        """Whether records owned by tenant_id are addressable by this caller"""
        return self.is_super_admin or (
            self.tenant_id is not None and self.tenant_id == tenant_id
        )
