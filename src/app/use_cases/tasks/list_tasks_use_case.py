"""
List Tasks Use Case
"""

from typing import List, Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.errors import invalid_choice, not_found, validation_error
from src.app.services.authorization import Action, ProjectResource, ensure_allowed
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import TaskPriority, TaskStatus
from src.domain.principal import Principal
from .dtos import TaskResponse


class ListTasksUseCase:
    """
    Use case for listing the tasks of a project.

    Business Rules:
    - Members of the project's tenant, or the super admin
    - Filters: status, priority, assigned_to, title search
    - Ordered high > medium > low, then earliest due date (undated last),
      then newest first
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        principal: Principal,
        project_id: UUID,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        assigned_to: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Result[List[TaskResponse]]:
        async with self.uow:
            project = await self.uow.projects.get_by_id(project_id)
            if project is None or not principal.can_see_tenant(project.tenant_id):
                return Return.err(not_found("Project"))

            denied = ensure_allowed(
                principal, Action.list_tasks, ProjectResource.of(project)
            )
            if denied:
                return Return.err(denied)

            status_filter = None
            if status:
                try:
                    status_filter = TaskStatus(status)
                except ValueError:
                    return Return.err(invalid_choice("status", TaskStatus))

            priority_filter = None
            if priority:
                try:
                    priority_filter = TaskPriority(priority)
                except ValueError:
                    return Return.err(invalid_choice("priority", TaskPriority))

            assignee_filter = None
            if assigned_to:
                try:
                    assignee_filter = UUID(assigned_to)
                except ValueError:
                    return Return.err(
                        validation_error("Invalid user ID format for assigned_to filter")
                    )

            tasks = await self.uow.tasks.list_by_project(
                project.id,
                status=status_filter,
                priority=priority_filter,
                assigned_to=assignee_filter,
                search=search or None,
            )
            return Return.ok([TaskResponse.from_entity(task) for task in tasks])
