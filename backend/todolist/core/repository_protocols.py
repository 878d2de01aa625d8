"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types, one narrow Protocol per aggregate
    - Nothing is durable until UnitOfWork.commit(); repositories only stage changes

Design Decisions:
    - Protocol over ABC: structural subtyping, no repository base class with virtual overrides
    - Async in Protocol: implementations do IO; every call is a suspension point
    - *Like Protocols describe the attributes the core reads, so ORM rows and
      test doubles are interchangeable
"""

from datetime import datetime
from typing import Protocol

from todolist.core.domain_types import (
    CommentId, TagId, TaskId, TaskListId, TaskSortBy, TaskStatus, UserId,
)


class UserLike(Protocol):
    """Structural contract for users handed to the sharing policy."""
    id: UserId
    email: str


class TaskLike(Protocol):
    """Structural contract for tasks handled by lifecycle and access checks."""
    id: TaskId
    owner_id: UserId
    task_list_id: TaskListId
    title: str
    status: str
    due_date: datetime | None
    tag_id: TagId | None


class TaskRepository(Protocol):
    """Contract for task persistence — implemented by shell."""
    async def find_owner(self, task_id: TaskId) -> UserId: ...
    async def get(self, task_id: TaskId) -> TaskLike | None: ...
    async def get_owned(self, task_id: TaskId, owner_id: UserId) -> TaskLike | None: ...
    async def add(self, task: TaskLike) -> None: ...
    async def delete(self, task: TaskLike) -> None: ...
    async def list_in_task_list(
        self,
        owner_id: UserId,
        task_list_id: TaskListId,
        statuses: list[TaskStatus] | None = None,
        due_before: datetime | None = None,
        due_after: datetime | None = None,
        sort_by: TaskSortBy | None = None,
        ascending: bool = True,
    ) -> list[TaskLike]: ...
    async def search_by_title(self, owner_id: UserId, text: str) -> list[TaskLike]: ...
    async def list_overdue(
        self, owner_id: UserId, task_list_id: TaskListId, now: datetime,
    ) -> list[TaskLike]: ...
    async def list_ids_for_owner(self, owner_id: UserId) -> list[TaskId]: ...
    async def list_ids_in_task_list(self, task_list_id: TaskListId) -> list[TaskId]: ...
    async def clear_tag(self, tag_id: TagId) -> int: ...


class GrantRepository(Protocol):
    """Contract for (task, user) access grants — implemented by shell."""
    async def exists(self, task_id: TaskId, user_id: UserId) -> bool: ...
    async def insert(self, task_id: TaskId, user_id: UserId) -> None: ...
    async def delete(self, task_id: TaskId, user_id: UserId) -> int: ...
    async def delete_all_for_task(self, task_id: TaskId) -> int: ...
    async def delete_all_for_user(self, user_id: UserId) -> int: ...
    async def list_users_for_task(
        self, task_id: TaskId, page: int, page_size: int,
    ) -> tuple[list[UserLike], int]: ...
    async def list_tasks_for_user(
        self, user_id: UserId, page: int, page_size: int,
    ) -> tuple[list[TaskLike], int]: ...


class TaskListRepository(Protocol):
    """Contract for task list persistence — implemented by shell."""
    async def exists_title_for_owner(
        self, title: str, owner_id: UserId, exclude_id: TaskListId | None = None,
    ) -> bool: ...
    async def get_owned(self, task_list_id: TaskListId, owner_id: UserId): ...
    async def add(self, task_list) -> None: ...
    async def delete(self, task_list) -> None: ...
    async def list_for_owner(
        self, owner_id: UserId, page: int, page_size: int,
    ) -> tuple[list, int]: ...


class TagRepository(Protocol):
    """Contract for tag persistence — implemented by shell."""
    async def exists_name_for_owner(self, name: str, owner_id: UserId) -> bool: ...
    async def get_owned(self, tag_id: TagId, owner_id: UserId): ...
    async def add(self, tag) -> None: ...
    async def delete(self, tag) -> None: ...
    async def list_for_owner(
        self, owner_id: UserId, page: int, page_size: int,
    ) -> tuple[list, int]: ...


class CommentRepository(Protocol):
    """Contract for comment persistence — implemented by shell."""
    async def get(self, comment_id: CommentId): ...
    async def add(self, comment) -> None: ...
    async def delete(self, comment) -> None: ...
    async def list_for_task(self, task_id: TaskId) -> list: ...


class UserRepository(Protocol):
    """Contract for user lookup — implemented by shell."""
    async def get_by_id(self, user_id: UserId) -> UserLike | None: ...
    async def get_by_email(self, email: str) -> UserLike | None: ...
    async def exists_user_name(self, user_name: str) -> bool: ...
    async def add(self, user) -> None: ...
    async def delete(self, user) -> None: ...


class UnitOfWork(Protocol):
    """Makes every staged change of the current request durable at once."""
    async def commit(self) -> None: ...
