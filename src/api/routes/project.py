from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from src.api.error import raise_for_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.projects import (
    CreateProjectCommand,
    CreateProjectUseCase,
    DeleteProjectResponse,
    DeleteProjectUseCase,
    GetProjectUseCase,
    ListProjectsUseCase,
    ProjectResponse,
    ProjectSummaryResponse,
    UpdateProjectCommand,
    UpdateProjectUseCase,
)
from src.depends import get_current_principal, get_unit_of_work
from src.domain.principal import Principal

router = APIRouter(prefix="/projects", tags=["Project"])


class CreateProjectRequest(BaseModel):
    """Create project HTTP request payload"""

    name: str = Field(..., max_length=255)
    description: Optional[str] = None


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ProjectResponse)
async def create_project(
    request: CreateProjectRequest,
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create a project in the caller's tenant.

    Raises:
        - 400 Bad Request: Missing name
        - 403 Forbidden: Caller is not a tenant admin
        - 409 Conflict: Project limit reached
    """
    command = CreateProjectCommand(name=request.name, description=request.description)

    result = await CreateProjectUseCase(uow).execute(principal, command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class ProjectsListResponse(BaseModel):
    """GET /projects response payload"""

    projects: List[ProjectSummaryResponse]
    total: int


@router.get("", status_code=status.HTTP_200_OK, response_model=ProjectsListResponse)
async def list_projects(
    status_filter: Optional[str] = Query(None, alias="status"),
    search: Optional[str] = Query(None, description="Case-insensitive name match"),
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """List projects of the caller's tenant (every tenant for the super admin)"""
    result = await ListProjectsUseCase(uow).execute(
        principal, status=status_filter, search=search
    )

    if result.is_err():
        raise_for_error(result.error)

    return ProjectsListResponse(projects=result.value, total=len(result.value))


@router.get(
    "/{project_id}",
    status_code=status.HTTP_200_OK,
    response_model=ProjectSummaryResponse,
)
async def get_project(
    project_id: UUID,
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Read a project.

    Raises:
        - 404 Not Found: Unknown project, or another tenant's project
    """
    result = await GetProjectUseCase(uow).execute(principal, project_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class UpdateProjectRequest(BaseModel):
    """Update project HTTP request payload"""

    name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    status: Optional[str] = None


@router.put(
    "/{project_id}", status_code=status.HTTP_200_OK, response_model=ProjectResponse
)
async def update_project(
    project_id: UUID,
    request: UpdateProjectRequest,
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update a project (creator or admin).

    Raises:
        - 400 Bad Request: No fields or invalid status
        - 403 Forbidden: Caller is neither creator nor admin
        - 404 Not Found: Unknown project, or another tenant's project
    """
    command = UpdateProjectCommand(**request.model_dump(exclude_unset=True))

    result = await UpdateProjectUseCase(uow).execute(principal, project_id, command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_200_OK,
    response_model=DeleteProjectResponse,
)
async def delete_project(
    project_id: UUID,
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete a project and all of its tasks.

    Raises:
        - 403 Forbidden: Caller is not a tenant admin
        - 404 Not Found: Unknown project, or another tenant's project
    """
    result = await DeleteProjectUseCase(uow).execute(principal, project_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
