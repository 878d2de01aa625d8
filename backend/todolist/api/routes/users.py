"""User Routes — registration, profile lookup and account deletion."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from todolist.api.dependencies import get_current_user_id, get_user_handlers
from todolist.schemas.user import UserCreate, UserResponse
from todolist.services.handle_users import UserHandlers

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.post(
    "", response_model=UserResponse, status_code=status.HTTP_201_CREATED,
)
async def register_user(
    body: UserCreate, handlers: UserHandlers = Depends(get_user_handlers),
):
    user = await handlers.register(
        body.first_name, body.last_name, body.user_name, body.email,
    )
    return UserResponse.model_validate(user)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: UUID,
    _caller: UUID = Depends(get_current_user_id),
    handlers: UserHandlers = Depends(get_user_handlers),
):
    return UserResponse.model_validate(await handlers.get(user_id))


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
async def delete_me(
    user_id: UUID = Depends(get_current_user_id),
    handlers: UserHandlers = Depends(get_user_handlers),
):
    """Delete the caller, everything they own, and every grant touching them."""
    await handlers.delete(user_id)
