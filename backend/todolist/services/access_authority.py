"""Task Access Authority — the single predicate gating task-scoped reads and writes.

Invariants:
    - has_access is true iff user is the task owner OR a grant exists for (task, user)
    - Ownership is checked first; the grant store is not queried for owners
    - Unknown task -> ResourceNotFoundError (from TaskRepository.find_owner)
    - Pure read: no side effects, nothing staged on the unit of work
"""

from uuid import UUID

from todolist.core.errors import (
    ErrorContext, InvalidOperationError, ResourceNotFoundError,
)
from todolist.core.repository_protocols import GrantRepository, TaskRepository


class TaskAccessAuthority:
    """Answers "can this user act on this task"."""

    def __init__(self, tasks: TaskRepository, grants: GrantRepository):
        self.tasks = tasks
        self.grants = grants

    async def has_access(self, task_id: UUID, user_id: UUID) -> bool:
        owner_id = await self.tasks.find_owner(task_id)
        if owner_id == user_id:
            return True
        return await self.grants.exists(task_id, user_id)

    async def require_access(self, task_id: UUID, user_id: UUID) -> None:
        """Raise unless the user owns the task or holds a grant on it."""
        if not await self.has_access(task_id, user_id):
            raise InvalidOperationError(
                "You don't have access to this task.",
                ErrorContext(user_id=str(user_id), task_id=str(task_id)),
            )

    async def require_owner(self, task_id: UUID, user_id: UUID) -> None:
        """Raise NotFound unless the user owns the task; strangers learn nothing."""
        owner_id = await self.tasks.find_owner(task_id)
        if owner_id != user_id:
            raise ResourceNotFoundError("Task", str(task_id))
