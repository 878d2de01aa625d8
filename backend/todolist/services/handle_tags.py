"""Tag Handlers — create tags on tasks, list and delete them.

Invariants:
    - Tag names are disambiguated per owner with the same " (n)" rule as list titles
    - Creating a tag from a task attaches it to that task in the same commit
    - Deleting a tag detaches it from every task first
"""

import logging
from uuid import UUID

from todolist.core.entity_rules import validate_tag_name
from todolist.core.errors import ResourceNotFoundError
from todolist.models.tag import Tag
from todolist.services.title_disambiguator import resolve_unique_title

logger = logging.getLogger(__name__)


class TagHandlers:
    """Owner-scoped tag commands and queries."""

    def __init__(self, uow, max_suffix: int | None = None):
        self.uow = uow
        self.tags = uow.tags
        self.tasks = uow.tasks
        self.max_suffix = max_suffix

    async def create_for_task(self, owner_id: UUID, task_id: UUID, name: str) -> Tag:
        task = await self.tasks.get_owned(task_id, owner_id)
        if task is None:
            raise ResourceNotFoundError("Task", str(task_id))
        name = validate_tag_name(name)

        async def exists(candidate: str) -> bool:
            return await self.tags.exists_name_for_owner(candidate, owner_id)

        tag = Tag(
            owner_id=owner_id,
            name=validate_tag_name(
                await resolve_unique_title(name, exists, self.max_suffix),
            ),
        )
        await self.tags.add(tag)
        task.tag_id = tag.id
        await self.uow.commit()
        logger.info(
            "Tag created",
            extra={"user_id": owner_id, "task_id": task_id, "title": tag.name},
        )
        return tag

    async def list_owned(
        self, owner_id: UUID, page: int, page_size: int,
    ) -> tuple[list[Tag], int]:
        return await self.tags.list_for_owner(owner_id, page, page_size)

    async def delete(self, owner_id: UUID, tag_id: UUID) -> None:
        tag = await self.tags.get_owned(tag_id, owner_id)
        if tag is None:
            raise ResourceNotFoundError("Tag", str(tag_id))
        await self.tasks.clear_tag(tag.id)
        await self.tags.delete(tag)
        await self.uow.commit()
