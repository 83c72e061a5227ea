from abc import ABC, abstractmethod

from src.app.repositories.audit_event_repository import IAuditEventRepository
from src.app.repositories.project_repository import IProjectRepository
from src.app.repositories.task_repository import ITaskRepository
from src.app.repositories.tenant_repository import ITenantRepository
from src.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """
    Abstract UnitOfWork - defines repository access and transaction management.

    One unit of work is one store transaction: everything read and written
    between ``__aenter__`` and ``commit`` is atomic, and leaving the block
    without committing rolls every change back.
    """

    # Repository properties (initialized in __aenter__)
    tenants: ITenantRepository
    users: IUserRepository
    projects: IProjectRepository
    tasks: ITaskRepository
    audit_events: IAuditEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
