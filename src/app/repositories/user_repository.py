from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import User, UserRole


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def get_by_tenant_and_email(
        self, tenant_id: UUID, email: str
    ) -> Optional[User]:
        """Get user by email within a tenant (case-insensitive)"""
        pass

    @abstractmethod
    async def get_super_admin_by_email(self, email: str) -> Optional[User]:
        """Get the tenant-less super admin by email"""
        pass

    @abstractmethod
    async def get_in_tenant(self, user_id: UUID, tenant_id: UUID) -> Optional[User]:
        """Get user by ID only if it belongs to tenant_id"""
        pass

    @abstractmethod
    async def list_by_tenant(
        self,
        tenant_id: UUID,
        search: Optional[str] = None,
        role: Optional[UserRole] = None,
    ) -> List[User]:
        """List users of a tenant, newest first"""
        pass

    @abstractmethod
    async def count_by_tenant(self, tenant_id: UUID) -> int:
        """Count users of a tenant"""
        pass

    @abstractmethod
    async def has_super_admin(self) -> bool:
        """Whether a super admin already exists"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

    @abstractmethod
    async def delete(self, user: User) -> None:
        """Delete user row"""
        pass
