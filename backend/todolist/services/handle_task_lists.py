"""Task List Handlers — create, rename, delete and page through owned lists.

Invariants:
    - Titles are validated, then disambiguated per owner ("Work" -> "Work (1)")
    - Renaming to the current title is a no-op; the list's own row never counts as a collision
    - Deleting a list revokes grants on each of its tasks before removing them

Design Decisions:
    - Title probe is a closure over owner_id: the disambiguator knows nothing about storage
"""

import logging
from uuid import UUID

from todolist.core.entity_rules import validate_task_list_title
from todolist.core.errors import ResourceNotFoundError
from todolist.models.task_list import TaskList
from todolist.services.sharing_policy import SharingPolicy
from todolist.services.title_disambiguator import resolve_unique_title

logger = logging.getLogger(__name__)


class TaskListHandlers:
    """Owner-scoped task list commands and queries."""

    def __init__(self, uow, sharing: SharingPolicy, max_suffix: int | None = None):
        self.uow = uow
        self.task_lists = uow.task_lists
        self.tasks = uow.tasks
        self.sharing = sharing
        self.max_suffix = max_suffix

    async def _get_owned_or_404(self, task_list_id: UUID, owner_id: UUID) -> TaskList:
        task_list = await self.task_lists.get_owned(task_list_id, owner_id)
        if task_list is None:
            raise ResourceNotFoundError("TaskList", str(task_list_id))
        return task_list

    async def _unique_title(
        self, title: str, owner_id: UUID, exclude_id: UUID | None = None,
    ) -> str:
        async def exists(candidate: str) -> bool:
            return await self.task_lists.exists_title_for_owner(
                candidate, owner_id, exclude_id,
            )

        unique = await resolve_unique_title(title, exists, self.max_suffix)
        return validate_task_list_title(unique)

    async def create(self, owner_id: UUID, title: str) -> TaskList:
        title = validate_task_list_title(title)
        task_list = TaskList(
            owner_id=owner_id,
            title=await self._unique_title(title, owner_id),
        )
        await self.task_lists.add(task_list)
        await self.uow.commit()
        logger.info(
            "Task list created",
            extra={"user_id": owner_id, "task_list_id": task_list.id},
        )
        return task_list

    async def rename(
        self, owner_id: UUID, task_list_id: UUID, title: str,
    ) -> TaskList:
        task_list = await self._get_owned_or_404(task_list_id, owner_id)
        title = validate_task_list_title(title)
        if task_list.title == title:
            return task_list
        task_list.title = await self._unique_title(title, owner_id, task_list.id)
        await self.uow.commit()
        return task_list

    async def delete(self, owner_id: UUID, task_list_id: UUID) -> None:
        task_list = await self._get_owned_or_404(task_list_id, owner_id)
        for task_id in await self.tasks.list_ids_in_task_list(task_list.id):
            await self.sharing.revoke_all_for_task(task_id)
        await self.task_lists.delete(task_list)
        await self.uow.commit()
        logger.info(
            "Task list deleted",
            extra={"user_id": owner_id, "task_list_id": task_list_id},
        )

    async def list_owned(
        self, owner_id: UUID, page: int, page_size: int,
    ) -> tuple[list[TaskList], int]:
        return await self.task_lists.list_for_owner(owner_id, page, page_size)
