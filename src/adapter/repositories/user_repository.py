from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, or_
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.search import LIKE_ESCAPE, contains_pattern
from src.app.repositories.user_repository import IUserRepository
from src.domain.entities import User, UserRole


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_tenant_and_email(
        self, tenant_id: UUID, email: str
    ) -> Optional[User]:
        """Get user by email within a tenant (case-insensitive)"""
        stmt = select(User).where(
            User.tenant_id == tenant_id, func.lower(User.email) == email.lower()
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_super_admin_by_email(self, email: str) -> Optional[User]:
        """Get the tenant-less super admin by email"""
        stmt = select(User).where(
            func.lower(User.email) == email.lower(),
            User.role == UserRole.super_admin,
            col(User.tenant_id).is_(None),
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def get_in_tenant(self, user_id: UUID, tenant_id: UUID) -> Optional[User]:
        """Get user by ID only if it belongs to tenant_id"""
        stmt = select(User).where(User.id == user_id, User.tenant_id == tenant_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_by_tenant(
        self,
        tenant_id: UUID,
        search: Optional[str] = None,
        role: Optional[UserRole] = None,
    ) -> List[User]:
        """List users of a tenant, newest first"""
        stmt = select(User).where(User.tenant_id == tenant_id)
        if search:
            pattern = contains_pattern(search)
            stmt = stmt.where(
                or_(
                    func.lower(User.email).like(pattern, escape=LIKE_ESCAPE),
                    func.lower(User.full_name).like(pattern, escape=LIKE_ESCAPE),
                )
            )
        if role is not None:
            stmt = stmt.where(User.role == role)
        stmt = stmt.order_by(col(User.created_at).desc())
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count_by_tenant(self, tenant_id: UUID) -> int:
        """Count users of a tenant"""
        stmt = select(func.count()).select_from(User).where(User.tenant_id == tenant_id)
        result = await self.session.exec(stmt)
        return result.one()

    async def has_super_admin(self) -> bool:
        """Whether a super admin already exists"""
        stmt = select(User.id).where(User.role == UserRole.super_admin).limit(1)
        result = await self.session.exec(stmt)
        return result.first() is not None

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        """Update existing user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def delete(self, user: User) -> None:
        """Delete user row"""
        await self.session.delete(user)
        await self.session.flush()
