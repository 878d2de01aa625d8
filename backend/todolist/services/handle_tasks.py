"""Task Handlers — owner-side task commands and queries.

Invariants:
    - Every command resolves the task through get_owned: a non-owner gets 404, never a hint
    - A task's owner_id is copied from its list at creation and never changes
    - Status changes go through core/task_lifecycle.py; same-status requests do not commit
    - Deleting a task revokes all of its grants in the same commit
    - Tags can only be attached by the owner of both the task and the tag

Design Decisions:
    - now() injected: due-date and overdue rules are tested without freezing the clock
"""

import logging
from datetime import datetime, timezone
from typing import Callable
from uuid import UUID

from todolist.core.domain_types import TaskSortBy, TaskStatus
from todolist.core.entity_rules import (
    validate_description, validate_due_date, validate_task_title,
)
from todolist.core.errors import ErrorContext, InvalidOperationError, ResourceNotFoundError
from todolist.core.task_lifecycle import change_status
from todolist.models.task import Task
from todolist.services.sharing_policy import SharingPolicy

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TaskHandlers:
    """Task CRUD, status, tagging and overdue cleanup."""

    def __init__(
        self, uow, sharing: SharingPolicy,
        now: Callable[[], datetime] = _utcnow,
    ):
        self.uow = uow
        self.tasks = uow.tasks
        self.task_lists = uow.task_lists
        self.tags = uow.tags
        self.sharing = sharing
        self.now = now

    async def get_owned_or_404(self, task_id: UUID, owner_id: UUID) -> Task:
        task = await self.tasks.get_owned(task_id, owner_id)
        if task is None:
            raise ResourceNotFoundError("Task", str(task_id))
        return task

    async def _require_owned_list(self, task_list_id: UUID, owner_id: UUID):
        task_list = await self.task_lists.get_owned(task_list_id, owner_id)
        if task_list is None:
            raise ResourceNotFoundError("TaskList", str(task_list_id))
        return task_list

    async def create(
        self,
        owner_id: UUID,
        task_list_id: UUID,
        title: str,
        description: str | None = None,
        due_date: datetime | None = None,
    ) -> Task:
        task_list = await self._require_owned_list(task_list_id, owner_id)
        task = Task(
            owner_id=task_list.owner_id,
            task_list_id=task_list.id,
            title=validate_task_title(title),
            description=validate_description(description),
            due_date=validate_due_date(due_date, self.now()),
            status=TaskStatus.NOT_STARTED.value,
        )
        await self.tasks.add(task)
        await self.uow.commit()
        logger.info(
            "Task created",
            extra={"user_id": owner_id, "task_id": task.id},
        )
        return task

    async def list_in_task_list(
        self,
        owner_id: UUID,
        task_list_id: UUID,
        statuses: list[TaskStatus] | None = None,
        due_before: datetime | None = None,
        due_after: datetime | None = None,
        sort_by: TaskSortBy | None = None,
        ascending: bool = True,
    ) -> list[Task]:
        await self._require_owned_list(task_list_id, owner_id)
        return await self.tasks.list_in_task_list(
            owner_id, task_list_id, statuses, due_before, due_after,
            sort_by, ascending,
        )

    async def search_by_title(self, owner_id: UUID, text: str) -> list[Task]:
        text = text.strip()
        if not text:
            return []
        return await self.tasks.search_by_title(owner_id, text)

    async def update_details(
        self,
        owner_id: UUID,
        task_id: UUID,
        title: str,
        description: str | None = None,
        due_date: datetime | None = None,
    ) -> Task:
        task = await self.get_owned_or_404(task_id, owner_id)
        task.title = validate_task_title(title)
        task.description = validate_description(description)
        task.due_date = validate_due_date(due_date, self.now())
        await self.uow.commit()
        return task

    async def delete(self, owner_id: UUID, task_id: UUID) -> None:
        task = await self.get_owned_or_404(task_id, owner_id)
        revoked = await self.sharing.revoke_all_for_task(task.id)
        await self.tasks.delete(task)
        await self.uow.commit()
        logger.info(
            f"Task deleted ({revoked} grant(s) revoked)",
            extra={"user_id": owner_id, "task_id": task_id},
        )

    async def change_status(
        self, owner_id: UUID, task_id: UUID, new_status: object,
    ) -> Task:
        task = await self.get_owned_or_404(task_id, owner_id)
        if change_status(task, new_status):
            await self.uow.commit()
        return task

    async def attach_tag(self, owner_id: UUID, task_id: UUID, tag_id: UUID) -> Task:
        task = await self.get_owned_or_404(task_id, owner_id)
        if task.tag_id == tag_id:
            return task
        tag = await self.tags.get_owned(tag_id, owner_id)
        if tag is None:
            raise InvalidOperationError(
                "Tag not found or not owned by you.",
                ErrorContext(user_id=str(owner_id), task_id=str(task_id)),
            )
        task.tag_id = tag.id
        await self.uow.commit()
        return task

    async def detach_tag(self, owner_id: UUID, task_id: UUID) -> Task:
        task = await self.get_owned_or_404(task_id, owner_id)
        if task.tag_id is None:
            return task
        task.tag_id = None
        await self.uow.commit()
        return task

    async def delete_overdue(self, owner_id: UUID, task_list_id: UUID) -> int:
        """Delete tasks of one list whose due date has passed."""
        await self._require_owned_list(task_list_id, owner_id)
        overdue = await self.tasks.list_overdue(owner_id, task_list_id, self.now())
        for task in overdue:
            await self.sharing.revoke_all_for_task(task.id)
            await self.tasks.delete(task)
        await self.uow.commit()
        logger.info(
            f"Deleted {len(overdue)} overdue task(s)",
            extra={"user_id": owner_id, "task_list_id": task_list_id},
        )
        return len(overdue)
