"""Sharing Policy — validates and applies grants of task access to other users.

Invariants:
    - can_grant_access evaluates, in order, first failure wins:
        candidate resolved -> task exists -> requester is owner
        -> candidate is not owner -> no existing grant
    - Grant creation commits only after every check passed (all-or-nothing)
    - revoke is idempotent: a missing grant is not an error
    - revoke_all_for_task / revoke_all_for_user leave no orphaned grants behind

Design Decisions:
    - Ordering rules live in core/enforce_sharing.py (pure); this class resolves the facts
    - No retry on ConcurrencyError from commit: two simultaneous shares of the same pair
      are settled by the grant primary key and the loser sees a 409
"""

import logging
from uuid import UUID

from todolist.core.enforce_sharing import (
    check_candidate_resolved,
    check_not_already_shared,
    check_requester_is_owner,
    normalize_email,
    validate_grant_preconditions,
)
from todolist.core.errors import ResourceNotFoundError
from todolist.core.repository_protocols import (
    GrantRepository, TaskRepository, UnitOfWork, UserLike, UserRepository,
)

logger = logging.getLogger(__name__)


class SharingPolicy:
    """Grant and revoke per-task access for non-owners."""

    def __init__(
        self,
        tasks: TaskRepository,
        grants: GrantRepository,
        users: UserRepository,
        uow: UnitOfWork,
    ):
        self.tasks = tasks
        self.grants = grants
        self.users = users
        self.uow = uow

    async def _owner_or_none(self, task_id: UUID) -> UUID | None:
        try:
            return await self.tasks.find_owner(task_id)
        except ResourceNotFoundError:
            return None

    async def can_grant_access(
        self, task_id: UUID, requesting_owner_id: UUID,
        candidate_user: UserLike | None,
    ) -> None:
        """Raise the first violated sharing rule; return None when the grant may be created."""
        check_candidate_resolved(candidate_user.id if candidate_user else None)
        owner_id = await self._owner_or_none(task_id)
        validate_grant_preconditions(owner_id, requesting_owner_id, candidate_user.id)
        check_not_already_shared(
            await self.grants.exists(task_id, candidate_user.id),
        )

    async def grant_access_by_email(
        self, task_id: UUID, owner_id: UUID, email: str,
    ) -> UserLike:
        """Share a task with the user registered under email."""
        candidate = await self.users.get_by_email(normalize_email(email))
        await self.can_grant_access(task_id, owner_id, candidate)
        await self.grants.insert(task_id, candidate.id)
        await self.uow.commit()
        logger.info(
            "Task shared",
            extra={"task_id": task_id, "user_id": candidate.id},
        )
        return candidate

    async def revoke(self, task_id: UUID, user_id: UUID) -> int:
        """Remove the grant for (task, user) if present. Does not commit."""
        return await self.grants.delete(task_id, user_id)

    async def revoke_all_for_task(self, task_id: UUID) -> int:
        """Remove every grant on a task. Does not commit."""
        return await self.grants.delete_all_for_task(task_id)

    async def revoke_all_for_user(self, user_id: UUID) -> int:
        """Remove every grant held by a user. Does not commit."""
        return await self.grants.delete_all_for_user(user_id)

    async def revoke_as_owner(
        self, task_id: UUID, owner_id: UUID, user_id: UUID,
    ) -> int:
        """Owner removes one user's access."""
        check_requester_is_owner(await self._owner_or_none(task_id), owner_id)
        return await self._revoke_checked(task_id, user_id)

    async def _revoke_checked(self, task_id: UUID, user_id: UUID) -> int:
        """Revoke and commit once ownership has been verified."""
        removed = await self.revoke(task_id, user_id)
        await self.uow.commit()
        logger.info(
            f"Access revoked ({removed} grant(s) removed)",
            extra={"task_id": task_id, "user_id": user_id},
        )
        return removed

    async def revoke_by_email(
        self, task_id: UUID, owner_id: UUID, email: str,
    ) -> int:
        """Owner removes access of the user registered under email."""
        check_requester_is_owner(await self._owner_or_none(task_id), owner_id)
        normalized = normalize_email(email)
        user = await self.users.get_by_email(normalized)
        if user is None:
            raise ResourceNotFoundError("User", normalized)
        return await self._revoke_checked(task_id, user.id)

    async def stop_sharing_task(self, task_id: UUID, owner_id: UUID) -> int:
        """Owner removes every grant on one task."""
        check_requester_is_owner(await self._owner_or_none(task_id), owner_id)
        removed = await self.revoke_all_for_task(task_id)
        await self.uow.commit()
        logger.info(
            f"Task unshared ({removed} grant(s) removed)",
            extra={"task_id": task_id},
        )
        return removed

    async def leave_all_shared_tasks(self, user_id: UUID) -> int:
        """A user drops every grant they hold."""
        removed = await self.revoke_all_for_user(user_id)
        await self.uow.commit()
        logger.info(
            f"Left shared tasks ({removed} grant(s) removed)",
            extra={"user_id": user_id},
        )
        return removed
