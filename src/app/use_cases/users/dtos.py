"""
User Use Case DTOs (Data Transfer Objects)
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.app.use_cases.tenants.dtos import TenantResponse
from src.domain.entities import User


class UpdateUserCommand(BaseModel):
    """
    Update user command.

    Only fields explicitly set by the caller are applied.
    """

    full_name: Optional[str] = None
    role: Optional[str] = None
    is_active: Optional[bool] = None


class UserResponse(BaseModel):
    """User state (never includes the password hash)"""

    id: str
    tenant_id: Optional[str]
    email: str
    full_name: str
    role: str
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(
            id=str(user.id),
            tenant_id=str(user.tenant_id) if user.tenant_id else None,
            email=user.email,
            full_name=user.full_name,
            role=user.role.value,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class DeleteUserResponse(BaseModel):
    """Response for delete user use case"""

    status: str
    tasks_unassigned: int


class MeResponse(BaseModel):
    """Current user with its tenant (None for the super admin)"""

    user: UserResponse
    tenant: Optional[TenantResponse] = None
