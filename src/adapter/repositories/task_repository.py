from datetime import datetime
from typing import Dict, List, Optional, Sequence
from uuid import UUID

from sqlalchemy import case, delete, func, update
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.search import LIKE_ESCAPE, contains_pattern
from src.app.repositories.task_repository import ITaskRepository
from src.domain.entities import Task, TaskPriority, TaskStatus


class TaskRepository(ITaskRepository):
    """Task repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, task_id: UUID) -> Optional[Task]:
        """Get task by ID"""
        stmt = select(Task).where(Task.id == task_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_by_project(
        self,
        project_id: UUID,
        status: Optional[TaskStatus] = None,
        priority: Optional[TaskPriority] = None,
        assigned_to: Optional[UUID] = None,
        search: Optional[str] = None,
    ) -> List[Task]:
        """List tasks: high before medium before low, then by due date (undated last)"""
        stmt = select(Task).where(Task.project_id == project_id)
        if status is not None:
            stmt = stmt.where(Task.status == status)
        if priority is not None:
            stmt = stmt.where(Task.priority == priority)
        if assigned_to is not None:
            stmt = stmt.where(Task.assigned_to == assigned_to)
        if search:
            stmt = stmt.where(
                func.lower(Task.title).like(contains_pattern(search), escape=LIKE_ESCAPE)
            )

        priority_rank = case(
            (Task.priority == TaskPriority.high, 1),
            (Task.priority == TaskPriority.medium, 2),
            else_=3,
        )
        stmt = stmt.order_by(
            priority_rank,
            col(Task.due_date).is_(None),
            col(Task.due_date).asc(),
            col(Task.created_at).desc(),
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count_by_tenant(self, tenant_id: UUID) -> int:
        """Count tasks of a tenant"""
        stmt = select(func.count()).select_from(Task).where(Task.tenant_id == tenant_id)
        result = await self.session.exec(stmt)
        return result.one()

    async def count_by_projects(self, project_ids: Sequence[UUID]) -> Dict[UUID, int]:
        """Count tasks per project"""
        if not project_ids:
            return {}
        stmt = (
            select(Task.project_id, func.count())
            .where(col(Task.project_id).in_(list(project_ids)))
            .group_by(Task.project_id)
        )
        result = await self.session.exec(stmt)
        return {project_id: count for project_id, count in result.all()}

    async def create(self, task: Task) -> Task:
        """Create a new task"""
        self.session.add(task)
        await self.session.flush()
        await self.session.refresh(task)
        return task

    async def update(self, task: Task) -> Task:
        """Update existing task"""
        self.session.add(task)
        await self.session.flush()
        await self.session.refresh(task)
        return task

    async def delete(self, task: Task) -> None:
        """Delete task row"""
        await self.session.delete(task)
        await self.session.flush()

    async def delete_by_project(self, project_id: UUID) -> int:
        """Delete every task of a project"""
        stmt = delete(Task).where(col(Task.project_id) == project_id)
        result = await self.session.execute(stmt)
        return result.rowcount

    async def unassign_user(self, user_id: UUID) -> int:
        """Set assigned_to=NULL on every task assigned to user_id"""
        stmt = (
            update(Task)
            .where(col(Task.assigned_to) == user_id)
            .values(assigned_to=None, updated_at=datetime.utcnow())
        )
        result = await self.session.execute(stmt)
        return result.rowcount
