"""
Task Use Case DTOs (Data Transfer Objects)
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel

from src.domain.entities import Task


# ============================================================================
# Command DTOs
# ============================================================================


class CreateTaskCommand(BaseModel):
    """Create task command (status always starts at todo)"""

    title: str
    description: Optional[str] = None
    priority: Optional[str] = None
    assigned_to: Optional[str] = None
    due_date: Optional[date] = None


class UpdateTaskStatusCommand(BaseModel):
    """Update task status command"""

    status: Optional[str] = None


class UpdateTaskCommand(BaseModel):
    """
    Full task update command.

    Only fields explicitly set are applied; an explicit null assigned_to
    unassigns the task and an explicit null due_date clears it.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    assigned_to: Optional[str] = None
    due_date: Optional[date] = None


# ============================================================================
# Response DTOs
# ============================================================================


class TaskResponse(BaseModel):
    """Task state"""

    id: str
    project_id: str
    tenant_id: str
    title: str
    description: Optional[str]
    status: str
    priority: str
    assigned_to: Optional[str]
    due_date: Optional[date]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, task: Task) -> "TaskResponse":
        return cls(
            id=str(task.id),
            project_id=str(task.project_id),
            tenant_id=str(task.tenant_id),
            title=task.title,
            description=task.description,
            status=task.status.value,
            priority=task.priority.value,
            assigned_to=str(task.assigned_to) if task.assigned_to else None,
            due_date=task.due_date,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )


class DeleteTaskResponse(BaseModel):
    """Response for delete task use case"""

    status: str
