"""Task List Routes — owned lists; titles are made unique per owner."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from todolist.api.dependencies import (
    Pagination, get_current_user_id, get_pagination, get_task_list_handlers,
)
from todolist.schemas.pagination import Page
from todolist.schemas.task_list import TaskListResponse, TaskListWrite
from todolist.services.handle_task_lists import TaskListHandlers

router = APIRouter(prefix="/api/v1/task-lists", tags=["task-lists"])


@router.get("", response_model=Page[TaskListResponse])
async def list_task_lists(
    pagination: Pagination = Depends(get_pagination),
    user_id: UUID = Depends(get_current_user_id),
    handlers: TaskListHandlers = Depends(get_task_list_handlers),
):
    items, total = await handlers.list_owned(
        user_id, pagination.page, pagination.page_size,
    )
    return Page[TaskListResponse](
        items=[TaskListResponse.model_validate(t) for t in items],
        total=total,
        page=pagination.page,
        page_size=pagination.page_size,
    )


@router.post(
    "", response_model=TaskListResponse, status_code=status.HTTP_201_CREATED,
)
async def create_task_list(
    body: TaskListWrite,
    user_id: UUID = Depends(get_current_user_id),
    handlers: TaskListHandlers = Depends(get_task_list_handlers),
):
    """Create a list; a taken title gets a " (n)" suffix."""
    task_list = await handlers.create(user_id, body.title)
    return TaskListResponse.model_validate(task_list)


@router.put("/{task_list_id}", response_model=TaskListResponse)
async def rename_task_list(
    task_list_id: UUID,
    body: TaskListWrite,
    user_id: UUID = Depends(get_current_user_id),
    handlers: TaskListHandlers = Depends(get_task_list_handlers),
):
    task_list = await handlers.rename(user_id, task_list_id, body.title)
    return TaskListResponse.model_validate(task_list)


@router.delete("/{task_list_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task_list(
    task_list_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    handlers: TaskListHandlers = Depends(get_task_list_handlers),
):
    await handlers.delete(user_id, task_list_id)
