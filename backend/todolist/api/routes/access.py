"""Access Routes — share tasks by email, inspect and revoke grants.

Invariants:
    - Grant and revoke go through SharingPolicy; routes never touch grants directly
    - Revocations answer with the number of grants removed (0 when none existed)
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from todolist.api.dependencies import (
    Pagination,
    get_current_user_id,
    get_pagination,
    get_shared_task_queries,
    get_sharing_policy,
)
from todolist.schemas.access import RevokeResult, ShareRequest
from todolist.schemas.pagination import Page
from todolist.schemas.task import TaskResponse
from todolist.schemas.user import UserResponse
from todolist.services.handle_sharing import SharedTaskQueries
from todolist.services.sharing_policy import SharingPolicy

router = APIRouter(prefix="/api/v1/access", tags=["access"])


@router.get("/tasks", response_model=Page[TaskResponse])
async def list_shared_tasks(
    pagination: Pagination = Depends(get_pagination),
    user_id: UUID = Depends(get_current_user_id),
    queries: SharedTaskQueries = Depends(get_shared_task_queries),
):
    """Tasks other users have shared with the caller."""
    items, total = await queries.list_shared_with(
        user_id, pagination.page, pagination.page_size,
    )
    return Page[TaskResponse](
        items=[TaskResponse.model_validate(t) for t in items],
        total=total,
        page=pagination.page,
        page_size=pagination.page_size,
    )


@router.get("/tasks/{task_id}", response_model=TaskResponse)
async def get_shared_task(
    task_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    queries: SharedTaskQueries = Depends(get_shared_task_queries),
):
    return TaskResponse.model_validate(await queries.get_shared(user_id, task_id))


@router.get("/tasks/{task_id}/users", response_model=Page[UserResponse])
async def list_task_users(
    task_id: UUID,
    pagination: Pagination = Depends(get_pagination),
    user_id: UUID = Depends(get_current_user_id),
    queries: SharedTaskQueries = Depends(get_shared_task_queries),
):
    items, total = await queries.list_users_for_task(
        user_id, task_id, pagination.page, pagination.page_size,
    )
    return Page[UserResponse](
        items=[UserResponse.model_validate(u) for u in items],
        total=total,
        page=pagination.page,
        page_size=pagination.page_size,
    )


@router.post(
    "/tasks/{task_id}/share",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def share_task(
    task_id: UUID,
    body: ShareRequest,
    user_id: UUID = Depends(get_current_user_id),
    sharing: SharingPolicy = Depends(get_sharing_policy),
):
    """Grant access to the user registered under body.email."""
    grantee = await sharing.grant_access_by_email(task_id, user_id, body.email)
    return UserResponse.model_validate(grantee)


@router.delete("/tasks/{task_id}/users/{grantee_id}", response_model=RevokeResult)
async def revoke_user(
    task_id: UUID,
    grantee_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    sharing: SharingPolicy = Depends(get_sharing_policy),
):
    revoked = await sharing.revoke_as_owner(task_id, user_id, grantee_id)
    return RevokeResult(revoked=revoked)


@router.delete("/tasks/{task_id}/by-email", response_model=RevokeResult)
async def revoke_by_email(
    task_id: UUID,
    email: str = Query(..., min_length=1),
    user_id: UUID = Depends(get_current_user_id),
    sharing: SharingPolicy = Depends(get_sharing_policy),
):
    revoked = await sharing.revoke_by_email(task_id, user_id, email)
    return RevokeResult(revoked=revoked)


@router.delete("/tasks/{task_id}", response_model=RevokeResult)
async def stop_sharing_task(
    task_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    sharing: SharingPolicy = Depends(get_sharing_policy),
):
    revoked = await sharing.stop_sharing_task(task_id, user_id)
    return RevokeResult(revoked=revoked)


@router.delete("/users/me", response_model=RevokeResult)
async def leave_shared_tasks(
    user_id: UUID = Depends(get_current_user_id),
    sharing: SharingPolicy = Depends(get_sharing_policy),
):
    """Drop every grant the caller holds."""
    revoked = await sharing.leave_all_shared_tasks(user_id)
    return RevokeResult(revoked=revoked)
