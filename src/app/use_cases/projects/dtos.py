"""
Project Use Case DTOs (Data Transfer Objects)
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.domain.entities import Project


# ============================================================================
# Command DTOs
# ============================================================================


class CreateProjectCommand(BaseModel):
    """Create project command"""

    name: str
    description: Optional[str] = None


class UpdateProjectCommand(BaseModel):
    """
    Update project command.

    Only fields explicitly set by the caller are applied; an explicit
    null description clears it.
    """

    name: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class ProjectResponse(BaseModel):
    """Project state"""

    id: str
    tenant_id: str
    name: str
    description: Optional[str]
    status: str
    created_by: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, project: Project) -> "ProjectResponse":
        return cls(
            id=str(project.id),
            tenant_id=str(project.tenant_id),
            name=project.name,
            description=project.description,
            status=project.status.value,
            created_by=str(project.created_by),
            created_at=project.created_at,
            updated_at=project.updated_at,
        )


class ProjectSummaryResponse(ProjectResponse):
    """Project as listed, with its task count and owning tenant"""

    task_count: int
    tenant_name: Optional[str] = None
    tenant_subdomain: Optional[str] = None


class DeleteProjectResponse(BaseModel):
    """Response for delete project use case"""

    status: str
    tasks_deleted: int
