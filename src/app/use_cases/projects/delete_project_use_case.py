"""
Delete Project Use Case

Removes a project together with all of its tasks.
"""

import logging
from uuid import UUID

from libs.result import Result, Return
from src.app.errors import not_found
from src.app.services.audit import record_audit
from src.app.services.authorization import Action, ProjectResource, ensure_allowed
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditAction
from src.domain.principal import Principal
from .dtos import DeleteProjectResponse

logger = logging.getLogger(__name__)


class DeleteProjectUseCase:
    """
    Use case for deleting a project.

    Business Rules:
    - Only a tenant admin of the owning tenant
    - Tasks are deleted first, then the project, in one transaction
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, principal: Principal, project_id: UUID
    ) -> Result[DeleteProjectResponse]:
        async with self.uow:
            project = await self.uow.projects.get_by_id(project_id)
            if project is None or not principal.can_see_tenant(project.tenant_id):
                return Return.err(not_found("Project"))

            denied = ensure_allowed(
                principal, Action.delete_project, ProjectResource.of(project)
            )
            if denied:
                return Return.err(denied)

            tasks_deleted = await self.uow.tasks.delete_by_project(project.id)
            await self.uow.projects.delete(project)

            await record_audit(
                self.uow,
                AuditAction.delete_project,
                tenant_id=project.tenant_id,
                user_id=principal.user_id,
                entity_type="project",
                entity_id=project.id,
                metadata={"name": project.name, "tasks_deleted": tasks_deleted},
            )
            await self.uow.commit()

            logger.info(
                "Project %s deleted with %d tasks", project.id, tasks_deleted
            )

            return Return.ok(
                DeleteProjectResponse(status="deleted", tasks_deleted=tasks_deleted)
            )
