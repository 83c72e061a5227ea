from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence
from uuid import UUID

from src.domain.entities import Task, TaskPriority, TaskStatus


class ITaskRepository(ABC):
    """Task repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, task_id: UUID) -> Optional[Task]:
        """Get task by ID"""
        pass

    @abstractmethod
    async def list_by_project(
        self,
        project_id: UUID,
        status: Optional[TaskStatus] = None,
        priority: Optional[TaskPriority] = None,
        assigned_to: Optional[UUID] = None,
        search: Optional[str] = None,
    ) -> List[Task]:
        """
        List tasks of a project.

        Ordered by priority (high, medium, low), then due date ascending with
        undated tasks last, then newest first.
        """
        pass

    @abstractmethod
    async def count_by_tenant(self, tenant_id: UUID) -> int:
        """Count tasks of a tenant"""
        pass

    @abstractmethod
    async def count_by_projects(self, project_ids: Sequence[UUID]) -> Dict[UUID, int]:
        """Count tasks per project"""
        pass

    @abstractmethod
    async def create(self, task: Task) -> Task:
        """Create a new task"""
        pass

    @abstractmethod
    async def update(self, task: Task) -> Task:
        """Update existing task"""
        pass

    @abstractmethod
    async def delete(self, task: Task) -> None:
        """Delete task row"""
        pass

    @abstractmethod
    async def delete_by_project(self, project_id: UUID) -> int:
        """Delete every task of a project, returns rows deleted"""
        pass

    @abstractmethod
    async def unassign_user(self, user_id: UUID) -> int:
        """Set assigned_to=NULL on every task of user_id, returns rows updated"""
        pass
