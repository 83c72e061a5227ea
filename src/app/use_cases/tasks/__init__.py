"""Task use cases"""

from .create_task_use_case import CreateTaskUseCase
from .delete_task_use_case import DeleteTaskUseCase
from .dtos import (
    CreateTaskCommand,
    DeleteTaskResponse,
    TaskResponse,
    UpdateTaskCommand,
    UpdateTaskStatusCommand,
)
from .list_tasks_use_case import ListTasksUseCase
from .update_task_status_use_case import UpdateTaskStatusUseCase
from .update_task_use_case import UpdateTaskUseCase

__all__ = [
    "CreateTaskCommand",
    "CreateTaskUseCase",
    "DeleteTaskResponse",
    "DeleteTaskUseCase",
    "ListTasksUseCase",
    "TaskResponse",
    "UpdateTaskCommand",
    "UpdateTaskStatusCommand",
    "UpdateTaskStatusUseCase",
    "UpdateTaskUseCase",
]
