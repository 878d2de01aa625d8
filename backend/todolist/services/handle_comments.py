"""Comment Handlers — discussion on tasks between the owner and grantees.

Invariants:
    - Creating and listing comments requires access (owner or grant), checked
      through TaskAccessAuthority
    - Only the author may edit a comment
    - The author or the task owner may delete a comment
    - A comment id addressed under the wrong task is reported as not found
"""

import logging
from uuid import UUID

from todolist.core.entity_rules import validate_comment_text
from todolist.core.errors import ErrorContext, InvalidOperationError, ResourceNotFoundError
from todolist.models.comment import Comment
from todolist.services.access_authority import TaskAccessAuthority

logger = logging.getLogger(__name__)


class CommentHandlers:
    """Comment CRUD gated by task access."""

    def __init__(self, uow, authority: TaskAccessAuthority):
        self.uow = uow
        self.comments = uow.comments
        self.tasks = uow.tasks
        self.authority = authority

    async def _get_on_task(self, task_id: UUID, comment_id: UUID) -> Comment:
        comment = await self.comments.get(comment_id)
        if comment is None or comment.task_id != task_id:
            raise ResourceNotFoundError("Comment", str(comment_id))
        return comment

    async def create(self, user_id: UUID, task_id: UUID, text: str) -> Comment:
        await self.authority.require_access(task_id, user_id)
        comment = Comment(
            task_id=task_id,
            author_id=user_id,
            text=validate_comment_text(text),
        )
        await self.comments.add(comment)
        await self.uow.commit()
        logger.info(
            "Comment added",
            extra={"user_id": user_id, "task_id": task_id},
        )
        return comment

    async def list_for_task(self, user_id: UUID, task_id: UUID) -> list[Comment]:
        await self.authority.require_access(task_id, user_id)
        return await self.comments.list_for_task(task_id)

    async def update(
        self, user_id: UUID, task_id: UUID, comment_id: UUID, text: str,
    ) -> Comment:
        comment = await self._get_on_task(task_id, comment_id)
        if comment.author_id != user_id:
            raise InvalidOperationError(
                "Only the author can edit this comment.",
                ErrorContext(user_id=str(user_id), task_id=str(task_id)),
            )
        comment.text = validate_comment_text(text)
        await self.uow.commit()
        return comment

    async def delete(self, user_id: UUID, task_id: UUID, comment_id: UUID) -> None:
        comment = await self._get_on_task(task_id, comment_id)
        if comment.author_id != user_id:
            owner_id = await self.tasks.find_owner(task_id)
            if owner_id != user_id:
                raise InvalidOperationError(
                    "You can't delete this comment.",
                    ErrorContext(user_id=str(user_id), task_id=str(task_id)),
                )
        await self.comments.delete(comment)
        await self.uow.commit()
