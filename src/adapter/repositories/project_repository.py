from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.search import LIKE_ESCAPE, contains_pattern
from src.app.repositories.project_repository import IProjectRepository
from src.domain.entities import Project, ProjectStatus


class ProjectRepository(IProjectRepository):
    """Project repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, project_id: UUID) -> Optional[Project]:
        """Get project by ID"""
        stmt = select(Project).where(Project.id == project_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list(
        self,
        tenant_id: Optional[UUID] = None,
        status: Optional[ProjectStatus] = None,
        search: Optional[str] = None,
    ) -> List[Project]:
        """List projects, newest first; tenant_id None lists every tenant"""
        stmt = select(Project)
        if tenant_id is not None:
            stmt = stmt.where(Project.tenant_id == tenant_id)
        if status is not None:
            stmt = stmt.where(Project.status == status)
        if search:
            stmt = stmt.where(
                func.lower(Project.name).like(
                    contains_pattern(search), escape=LIKE_ESCAPE
                )
            )
        stmt = stmt.order_by(col(Project.created_at).desc())
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count_by_tenant(self, tenant_id: UUID) -> int:
        """Count projects of a tenant"""
        stmt = (
            select(func.count())
            .select_from(Project)
            .where(Project.tenant_id == tenant_id)
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def create(self, project: Project) -> Project:
        """Create a new project"""
        self.session.add(project)
        await self.session.flush()
        await self.session.refresh(project)
        return project

    async def update(self, project: Project) -> Project:
        """Update existing project"""
        self.session.add(project)
        await self.session.flush()
        await self.session.refresh(project)
        return project

    async def delete(self, project: Project) -> None:
        """Delete project row"""
        await self.session.delete(project)
        await self.session.flush()
