"""Shared Task Queries — what a user sees of tasks shared with them.

Invariants:
    - A grantee sees a shared task only while a grant exists; otherwise 404
    - Only the owner may list who a task is shared with
"""

from uuid import UUID

from todolist.core.errors import ResourceNotFoundError
from todolist.services.access_authority import TaskAccessAuthority


class SharedTaskQueries:
    """Read side of sharing; all commands live on SharingPolicy."""

    def __init__(self, uow, authority: TaskAccessAuthority):
        self.tasks = uow.tasks
        self.grants = uow.grants
        self.authority = authority

    async def list_shared_with(self, user_id: UUID, page: int, page_size: int):
        return await self.grants.list_tasks_for_user(user_id, page, page_size)

    async def get_shared(self, user_id: UUID, task_id: UUID):
        if not await self.grants.exists(task_id, user_id):
            raise ResourceNotFoundError("Task", str(task_id))
        return await self.tasks.get(task_id)

    async def list_users_for_task(
        self, owner_id: UUID, task_id: UUID, page: int, page_size: int,
    ):
        await self.authority.require_owner(task_id, owner_id)
        return await self.grants.list_users_for_task(task_id, page, page_size)
