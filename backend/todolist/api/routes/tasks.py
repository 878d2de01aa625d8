"""Task Routes — owner-side task CRUD, filtering, status and tagging.

Invariants:
    - /tasks/search is registered before /tasks/{task_id} so "search" never parses as an id
    - Tasks of other users answer 404, not 403
"""

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from todolist.api.dependencies import get_current_user_id, get_task_handlers
from todolist.core.domain_types import TaskSortBy, TaskStatus
from todolist.schemas.task import (
    OverdueDeletion, TaskResponse, TaskStatusChange, TaskWrite,
)
from todolist.services.handle_tasks import TaskHandlers

router = APIRouter(prefix="/api/v1", tags=["tasks"])


# ─── Tasks within a list ────────────────────────────────────────

@router.post(
    "/task-lists/{task_list_id}/tasks",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_task(
    task_list_id: UUID,
    body: TaskWrite,
    user_id: UUID = Depends(get_current_user_id),
    handlers: TaskHandlers = Depends(get_task_handlers),
):
    task = await handlers.create(
        user_id, task_list_id, body.title, body.description, body.due_date,
    )
    return TaskResponse.model_validate(task)


@router.get(
    "/task-lists/{task_list_id}/tasks", response_model=list[TaskResponse],
)
async def list_tasks(
    task_list_id: UUID,
    statuses: list[TaskStatus] | None = Query(None, alias="status"),
    due_before: datetime | None = Query(None),
    due_after: datetime | None = Query(None),
    sort_by: TaskSortBy | None = Query(None),
    ascending: bool = Query(True),
    user_id: UUID = Depends(get_current_user_id),
    handlers: TaskHandlers = Depends(get_task_handlers),
):
    """List tasks of an owned list, filtered by status and due window."""
    tasks = await handlers.list_in_task_list(
        user_id, task_list_id, statuses, due_before, due_after,
        sort_by, ascending,
    )
    return [TaskResponse.model_validate(t) for t in tasks]


@router.delete(
    "/task-lists/{task_list_id}/tasks/overdue", response_model=OverdueDeletion,
)
async def delete_overdue_tasks(
    task_list_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    handlers: TaskHandlers = Depends(get_task_handlers),
):
    deleted = await handlers.delete_overdue(user_id, task_list_id)
    return OverdueDeletion(deleted=deleted)


# ─── Single task ────────────────────────────────────────────────

@router.get("/tasks/search", response_model=list[TaskResponse])
async def search_tasks(
    title: str = Query(..., min_length=1),
    user_id: UUID = Depends(get_current_user_id),
    handlers: TaskHandlers = Depends(get_task_handlers),
):
    tasks = await handlers.search_by_title(user_id, title)
    return [TaskResponse.model_validate(t) for t in tasks]


@router.get("/tasks/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    handlers: TaskHandlers = Depends(get_task_handlers),
):
    return TaskResponse.model_validate(
        await handlers.get_owned_or_404(task_id, user_id),
    )


@router.put("/tasks/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: UUID,
    body: TaskWrite,
    user_id: UUID = Depends(get_current_user_id),
    handlers: TaskHandlers = Depends(get_task_handlers),
):
    task = await handlers.update_details(
        user_id, task_id, body.title, body.description, body.due_date,
    )
    return TaskResponse.model_validate(task)


@router.delete("/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    handlers: TaskHandlers = Depends(get_task_handlers),
):
    """Delete an owned task; every grant on it goes with it."""
    await handlers.delete(user_id, task_id)


@router.put("/tasks/{task_id}/status", response_model=TaskResponse)
async def change_task_status(
    task_id: UUID,
    body: TaskStatusChange,
    user_id: UUID = Depends(get_current_user_id),
    handlers: TaskHandlers = Depends(get_task_handlers),
):
    task = await handlers.change_status(user_id, task_id, body.status)
    return TaskResponse.model_validate(task)


@router.put("/tasks/{task_id}/tags/{tag_id}", response_model=TaskResponse)
async def attach_tag(
    task_id: UUID,
    tag_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    handlers: TaskHandlers = Depends(get_task_handlers),
):
    task = await handlers.attach_tag(user_id, task_id, tag_id)
    return TaskResponse.model_validate(task)


@router.delete("/tasks/{task_id}/tag", response_model=TaskResponse)
async def detach_tag(
    task_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    handlers: TaskHandlers = Depends(get_task_handlers),
):
    task = await handlers.detach_tag(user_id, task_id)
    return TaskResponse.model_validate(task)
