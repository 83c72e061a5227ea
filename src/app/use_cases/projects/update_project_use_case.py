"""
Update Project Use Case
"""

import logging
from datetime import datetime
from uuid import UUID

from libs.result import Result, Return
from src.app.errors import invalid_choice, not_found, validation_error
from src.app.services.audit import record_audit
from src.app.services.authorization import Action, ProjectResource, ensure_allowed
from src.app.services.unit_of_work import UnitOfWork
from src.app.validators import is_blank
from src.domain.entities import AuditAction, ProjectStatus
from src.domain.principal import Principal
from .dtos import ProjectResponse, UpdateProjectCommand

logger = logging.getLogger(__name__)


class UpdateProjectUseCase:
    """
    Use case for updating a project.

    Business Rules:
    - Caller must be in the project's tenant
    - Creator, tenant admin or super admin may update
    - tenant_id and created_by never change
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, principal: Principal, project_id: UUID, command: UpdateProjectCommand
    ) -> Result[ProjectResponse]:
        changes = command.model_dump(exclude_unset=True)

        async with self.uow:
            project = await self.uow.projects.get_by_id(project_id)
            if project is None or not principal.can_see_tenant(project.tenant_id):
                return Return.err(not_found("Project"))

            denied = ensure_allowed(
                principal, Action.update_project, ProjectResource.of(project)
            )
            if denied:
                return Return.err(denied)

            if not changes:
                return Return.err(validation_error("No fields to update"))

            if "name" in changes:
                if is_blank(changes["name"]):
                    return Return.err(validation_error("Project name is required"))
                project.name = changes["name"].strip()
            if "description" in changes:
                project.description = changes["description"]
            if "status" in changes:
                try:
                    project.status = ProjectStatus(changes["status"])
                except ValueError:
                    return Return.err(invalid_choice("status", ProjectStatus))

            project.updated_at = datetime.utcnow()
            project = await self.uow.projects.update(project)

            await record_audit(
                self.uow,
                AuditAction.update_project,
                tenant_id=project.tenant_id,
                user_id=principal.user_id,
                entity_type="project",
                entity_id=project.id,
                metadata=changes,
            )
            await self.uow.commit()

            return Return.ok(ProjectResponse.from_entity(project))
