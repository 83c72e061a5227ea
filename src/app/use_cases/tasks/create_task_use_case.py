"""
Create Task Use Case
"""

import logging
from uuid import UUID

from libs.result import Result, Return
from src.app.errors import invalid_choice, not_found, validation_error
from src.app.services.audit import record_audit
from src.app.services.authorization import Action, ProjectResource, ensure_allowed
from src.app.services.unit_of_work import UnitOfWork
from src.app.validators import is_blank
from src.domain.entities import AuditAction, Task, TaskPriority, TaskStatus
from src.domain.principal import Principal
from .assignee import resolve_assignee
from .dtos import CreateTaskCommand, TaskResponse

logger = logging.getLogger(__name__)


class CreateTaskUseCase:
    """
    Use case for creating a task in a project.

    Business Rules:
    - Any member of the project's tenant may create tasks
    - Assignee, when given, must be a user of the project's tenant
    - Priority defaults to medium; status always starts at todo
    - tenant_id is copied from the project
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, principal: Principal, project_id: UUID, command: CreateTaskCommand
    ) -> Result[TaskResponse]:
        """
        Execute create task use case.

        Args:
            principal: Caller
            project_id: Project receiving the task
            command: CreateTaskCommand with task details

        Returns:
            Result with the created TaskResponse, or Error
        """
        async with self.uow:
            project = await self.uow.projects.get_by_id(project_id)
            if project is None or not principal.can_see_tenant(project.tenant_id):
                return Return.err(not_found("Project"))

            denied = ensure_allowed(
                principal, Action.create_task, ProjectResource.of(project)
            )
            if denied:
                return Return.err(denied)

            if is_blank(command.title):
                return Return.err(validation_error("Task title is required"))

            assignee = await resolve_assignee(
                self.uow, command.assigned_to, project.tenant_id
            )
            if assignee.is_err():
                return assignee

            try:
                priority = TaskPriority(command.priority or TaskPriority.medium)
            except ValueError:
                return Return.err(invalid_choice("priority", TaskPriority))

            task = await self.uow.tasks.create(
                Task(
                    project_id=project.id,
                    tenant_id=project.tenant_id,
                    title=command.title.strip(),
                    description=command.description,
                    status=TaskStatus.todo,
                    priority=priority,
                    assigned_to=assignee.value,
                    due_date=command.due_date,
                )
            )

            await record_audit(
                self.uow,
                AuditAction.create_task,
                tenant_id=task.tenant_id,
                user_id=principal.user_id,
                entity_type="task",
                entity_id=task.id,
                metadata={"title": task.title, "project_id": str(project.id)},
            )
            await self.uow.commit()

            logger.info("Task %s created in project %s", task.id, project.id)

            return Return.ok(TaskResponse.from_entity(task))
