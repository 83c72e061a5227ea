from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import raise_for_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.users import (
    DeleteUserResponse,
    DeleteUserUseCase,
    UpdateUserCommand,
    UpdateUserUseCase,
    UserResponse,
)
from src.depends import get_current_principal, get_unit_of_work
from src.domain.principal import Principal

router = APIRouter(prefix="/users", tags=["User"])


class UpdateUserRequest(BaseModel):
    """
    Update user HTTP request payload

    Users may change their own full_name; role and is_active need an admin.
    """

    full_name: Optional[str] = Field(None, max_length=255)
    role: Optional[str] = None
    is_active: Optional[bool] = None


@router.put("/{user_id}", status_code=status.HTTP_200_OK, response_model=UserResponse)
async def update_user(
    user_id: UUID,
    request: UpdateUserRequest,
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update a user.

    Raises:
        - 400 Bad Request: No fields or invalid values
        - 403 Forbidden: Not allowed, including any self role change or self deactivation
        - 404 Not Found: Unknown user, or another tenant's user
    """
    command = UpdateUserCommand(**request.model_dump(exclude_unset=True))

    result = await UpdateUserUseCase(uow).execute(principal, user_id, command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete(
    "/{user_id}", status_code=status.HTTP_200_OK, response_model=DeleteUserResponse
)
async def delete_user(
    user_id: UUID,
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete a user; their tasks become unassigned.

    Raises:
        - 403 Forbidden: Self-deletion, or caller is not an admin of the tenant
        - 404 Not Found: Unknown user, or another tenant's user
    """
    result = await DeleteUserUseCase(uow).execute(principal, user_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
