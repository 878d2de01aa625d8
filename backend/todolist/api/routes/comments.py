"""Comment Routes — open to the task owner and every grantee."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from todolist.api.dependencies import get_comment_handlers, get_current_user_id
from todolist.schemas.comment import CommentResponse, CommentWrite
from todolist.services.handle_comments import CommentHandlers

router = APIRouter(prefix="/api/v1/tasks/{task_id}/comments", tags=["comments"])


@router.get("", response_model=list[CommentResponse])
async def list_comments(
    task_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    handlers: CommentHandlers = Depends(get_comment_handlers),
):
    comments = await handlers.list_for_task(user_id, task_id)
    return [CommentResponse.model_validate(c) for c in comments]


@router.post(
    "", response_model=CommentResponse, status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    task_id: UUID,
    body: CommentWrite,
    user_id: UUID = Depends(get_current_user_id),
    handlers: CommentHandlers = Depends(get_comment_handlers),
):
    comment = await handlers.create(user_id, task_id, body.text)
    return CommentResponse.model_validate(comment)


@router.put("/{comment_id}", response_model=CommentResponse)
async def update_comment(
    task_id: UUID,
    comment_id: UUID,
    body: CommentWrite,
    user_id: UUID = Depends(get_current_user_id),
    handlers: CommentHandlers = Depends(get_comment_handlers),
):
    comment = await handlers.update(user_id, task_id, comment_id, body.text)
    return CommentResponse.model_validate(comment)


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    task_id: UUID,
    comment_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    handlers: CommentHandlers = Depends(get_comment_handlers),
):
    await handlers.delete(user_id, task_id, comment_id)
