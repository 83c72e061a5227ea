"""Project use cases"""

from .create_project_use_case import CreateProjectUseCase
from .delete_project_use_case import DeleteProjectUseCase
from .dtos import (
    CreateProjectCommand,
    DeleteProjectResponse,
    ProjectResponse,
    ProjectSummaryResponse,
    UpdateProjectCommand,
)
from .get_project_use_case import GetProjectUseCase
from .list_projects_use_case import ListProjectsUseCase
from .update_project_use_case import UpdateProjectUseCase

__all__ = [
    "CreateProjectCommand",
    "CreateProjectUseCase",
    "DeleteProjectResponse",
    "DeleteProjectUseCase",
    "GetProjectUseCase",
    "ListProjectsUseCase",
    "ProjectResponse",
    "ProjectSummaryResponse",
    "UpdateProjectCommand",
    "UpdateProjectUseCase",
]
