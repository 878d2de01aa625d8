"""Tag Routes — owned tags; created from a task and attached to it."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from todolist.api.dependencies import (
    Pagination, get_current_user_id, get_pagination, get_tag_handlers,
)
from todolist.schemas.pagination import Page
from todolist.schemas.tag import TagCreate, TagResponse
from todolist.services.handle_tags import TagHandlers

router = APIRouter(prefix="/api/v1", tags=["tags"])


@router.get("/tags", response_model=Page[TagResponse])
async def list_tags(
    pagination: Pagination = Depends(get_pagination),
    user_id: UUID = Depends(get_current_user_id),
    handlers: TagHandlers = Depends(get_tag_handlers),
):
    items, total = await handlers.list_owned(
        user_id, pagination.page, pagination.page_size,
    )
    return Page[TagResponse](
        items=[TagResponse.model_validate(t) for t in items],
        total=total,
        page=pagination.page,
        page_size=pagination.page_size,
    )


@router.post(
    "/tasks/{task_id}/tags",
    response_model=TagResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_tag(
    task_id: UUID,
    body: TagCreate,
    user_id: UUID = Depends(get_current_user_id),
    handlers: TagHandlers = Depends(get_tag_handlers),
):
    tag = await handlers.create_for_task(user_id, task_id, body.name)
    return TagResponse.model_validate(tag)


@router.delete("/tags/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tag(
    tag_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    handlers: TagHandlers = Depends(get_tag_handlers),
):
    await handlers.delete(user_id, tag_id)
