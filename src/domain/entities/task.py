"""
Task Entity

A unit of work inside a project.
"""

from datetime import date, datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import TaskPriority, TaskStatus


class Task(SQLModel, table=True):
    """
    Task entity.

    Business Rules:
    - tenant_id is copied from the project and must match it
    - assigned_to, when set, references a user of the same tenant
    - No enforced status transition graph
    """

    __tablename__ = "tasks"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", nullable=False, index=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, index=True)

    title: str = Field(max_length=255)
    description: Optional[str] = Field(default=None)
    status: TaskStatus = Field(default=TaskStatus.todo)
    priority: TaskPriority = Field(default=TaskPriority.medium)

    assigned_to: Optional[UUID] = Field(
        default=None, foreign_key="users.id", index=True
    )
    due_date: Optional[date] = Field(default=None)

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_task_project_status", "project_id", "status"),
        Index("idx_task_priority", "priority"),
    )
