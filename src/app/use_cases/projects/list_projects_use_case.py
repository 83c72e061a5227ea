"""
List Projects Use Case
"""

from typing import Dict, List, Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.errors import invalid_choice
from src.app.services.authorization import Action, ensure_allowed
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ProjectStatus, Tenant
from src.domain.principal import Principal
from .dtos import ProjectResponse, ProjectSummaryResponse


class ListProjectsUseCase:
    """
    Use case for listing projects.

    Business Rules:
    - Tenant members see their own tenant's projects
    - Super admin sees every tenant's projects
    - Optional status filter and case-insensitive name search
    - Newest first, each with its task count and tenant name
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        principal: Principal,
        status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Result[List[ProjectSummaryResponse]]:
        denied = ensure_allowed(principal, Action.list_projects)
        if denied:
            return Return.err(denied)

        status_filter = None
        if status:
            try:
                status_filter = ProjectStatus(status)
            except ValueError:
                return Return.err(invalid_choice("status", ProjectStatus))

        async with self.uow:
            projects = await self.uow.projects.list(
                tenant_id=None if principal.is_super_admin else principal.tenant_id,
                status=status_filter,
                search=search or None,
            )
            task_counts = await self.uow.tasks.count_by_projects(
                [project.id for project in projects]
            )

            tenants: Dict[UUID, Optional[Tenant]] = {}
            for project in projects:
                if project.tenant_id not in tenants:
                    tenants[project.tenant_id] = await self.uow.tenants.get_by_id(
                        project.tenant_id
                    )

            summaries = []
            for project in projects:
                tenant = tenants[project.tenant_id]
                summaries.append(
                    ProjectSummaryResponse(
                        **ProjectResponse.from_entity(project).model_dump(),
                        task_count=task_counts.get(project.id, 0),
                        tenant_name=tenant.name if tenant else None,
                        tenant_subdomain=tenant.subdomain if tenant else None,
                    )
                )
            return Return.ok(summaries)
