from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from src.api.error import raise_for_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.tasks import (
    CreateTaskCommand,
    CreateTaskUseCase,
    DeleteTaskResponse,
    DeleteTaskUseCase,
    ListTasksUseCase,
    TaskResponse,
    UpdateTaskCommand,
    UpdateTaskStatusCommand,
    UpdateTaskStatusUseCase,
    UpdateTaskUseCase,
)
from src.depends import get_current_principal, get_unit_of_work
from src.domain.principal import Principal

router = APIRouter(tags=["Task"])


class CreateTaskRequest(BaseModel):
    """Create task HTTP request payload"""

    title: str = Field(..., max_length=255)
    description: Optional[str] = None
    priority: Optional[str] = Field(None, description="low, medium (default) or high")
    assigned_to: Optional[str] = Field(None, description="User id in the same tenant")
    due_date: Optional[date] = None


@router.post(
    "/projects/{project_id}/tasks",
    status_code=status.HTTP_201_CREATED,
    response_model=TaskResponse,
)
async def create_task(
    project_id: UUID,
    request: CreateTaskRequest,
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create a task in a project.

    Raises:
        - 400 Bad Request: Missing title, invalid priority or assignee
        - 404 Not Found: Unknown project, or another tenant's project
    """
    command = CreateTaskCommand(**request.model_dump())

    result = await CreateTaskUseCase(uow).execute(principal, project_id, command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class TasksListResponse(BaseModel):
    """GET /projects/{project_id}/tasks response payload"""

    tasks: List[TaskResponse]
    total: int


@router.get(
    "/projects/{project_id}/tasks",
    status_code=status.HTTP_200_OK,
    response_model=TasksListResponse,
)
async def list_tasks(
    project_id: UUID,
    status_filter: Optional[str] = Query(None, alias="status"),
    priority: Optional[str] = Query(None),
    assigned_to: Optional[str] = Query(None),
    search: Optional[str] = Query(None, description="Case-insensitive title match"),
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List the tasks of a project.

    Ordered by priority (high first), then due date (undated last), then
    newest first.
    """
    result = await ListTasksUseCase(uow).execute(
        principal,
        project_id,
        status=status_filter,
        priority=priority,
        assigned_to=assigned_to,
        search=search,
    )

    if result.is_err():
        raise_for_error(result.error)

    return TasksListResponse(tasks=result.value, total=len(result.value))


class UpdateTaskStatusRequest(BaseModel):
    """Update task status HTTP request payload"""

    status: str = Field(..., description="todo, in_progress or completed")


@router.patch(
    "/tasks/{task_id}/status",
    status_code=status.HTTP_200_OK,
    response_model=TaskResponse,
)
async def update_task_status(
    task_id: UUID,
    request: UpdateTaskStatusRequest,
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Change a task's status (assignee or admin).

    Raises:
        - 400 Bad Request: Invalid status
        - 403 Forbidden: Caller is neither assignee nor admin
        - 404 Not Found: Unknown task, or another tenant's task
    """
    command = UpdateTaskStatusCommand(status=request.status)

    result = await UpdateTaskStatusUseCase(uow).execute(principal, task_id, command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class UpdateTaskRequest(BaseModel):
    """Full task update HTTP request payload (null assigned_to unassigns)"""

    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    assigned_to: Optional[str] = None
    due_date: Optional[date] = None


@router.put(
    "/tasks/{task_id}", status_code=status.HTTP_200_OK, response_model=TaskResponse
)
async def update_task(
    task_id: UUID,
    request: UpdateTaskRequest,
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update a task (assignee or admin).

    Raises:
        - 400 Bad Request: No fields, invalid values or assignee
        - 403 Forbidden: Caller is neither assignee nor admin
        - 404 Not Found: Unknown task, or another tenant's task
    """
    command = UpdateTaskCommand(**request.model_dump(exclude_unset=True))

    result = await UpdateTaskUseCase(uow).execute(principal, task_id, command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete(
    "/tasks/{task_id}",
    status_code=status.HTTP_200_OK,
    response_model=DeleteTaskResponse,
)
async def delete_task(
    task_id: UUID,
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete a task (tenant admin only).

    Raises:
        - 403 Forbidden: Caller is not a tenant admin
        - 404 Not Found: Unknown task, or another tenant's task
    """
    result = await DeleteTaskUseCase(uow).execute(principal, task_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
