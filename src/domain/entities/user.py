"""
User Entity

Represents a person belonging to exactly one tenant, or the platform
super admin who belongs to none.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import CheckConstraint, Column, DateTime, Field, Index, SQLModel

from .enums import UserRole


class User(SQLModel, table=True):
    """
    User entity.

    Business Rules:
    - tenant_id is NULL exactly when role is super_admin
    - Email is unique within a tenant, stored lowercase
    - Password stored as bcrypt hash
    - Deleting a user unassigns its tasks in the same transaction
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: Optional[UUID] = Field(
        default=None, foreign_key="tenants.id", index=True
    )

    email: str = Field(max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars
    full_name: str = Field(max_length=255)

    role: UserRole = Field(default=UserRole.user)
    is_active: bool = Field(default=True)

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_user_tenant_email", "tenant_id", "email", unique=True),
        Index("idx_user_role", "role"),
        CheckConstraint(
            "(role = 'super_admin' AND tenant_id IS NULL) OR "
            "(role != 'super_admin' AND tenant_id IS NOT NULL)",
            name="ck_user_tenant_matches_role",
        ),
    )
