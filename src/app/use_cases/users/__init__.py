"""User use cases"""

from .delete_user_use_case import DeleteUserUseCase
from .dtos import DeleteUserResponse, MeResponse, UpdateUserCommand, UserResponse
from .load_context_use_case import LoadContextUseCase
from .update_user_use_case import UpdateUserUseCase

__all__ = [
    "DeleteUserResponse",
    "DeleteUserUseCase",
    "LoadContextUseCase",
    "MeResponse",
    "UpdateUserCommand",
    "UpdateUserUseCase",
    "UserResponse",
]
