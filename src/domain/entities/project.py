"""
Project Entity

A tenant-owned container of tasks.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import ProjectStatus


class Project(SQLModel, table=True):
    """
    Project entity.

    Business Rules:
    - tenant_id is set from the creator's principal and never changes
    - Count per tenant is bounded by Tenant.max_projects
    - Deleting a project deletes its tasks in the same transaction
    """

    __tablename__ = "projects"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, index=True)

    name: str = Field(max_length=255)
    description: Optional[str] = Field(default=None)
    status: ProjectStatus = Field(default=ProjectStatus.active)

    # No FK: the creator may be deleted later
    created_by: UUID = Field(nullable=False)

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_project_tenant_status", "tenant_id", "status"),)
