"""User Handlers — registration, lookup and self-deletion.

Invariants:
    - Emails are stored normalized (trimmed, lower-cased); duplicates are rejected
    - Deleting a user revokes grants on their tasks and grants they hold before
      any row is removed, all in one commit
"""

import logging
from uuid import UUID

from todolist.core.enforce_sharing import normalize_email
from todolist.core.errors import DomainError, InvalidOperationError, ResourceNotFoundError
from todolist.models.user import User
from todolist.services.sharing_policy import SharingPolicy

logger = logging.getLogger(__name__)


class UserHandlers:
    """User account commands."""

    def __init__(self, uow, sharing: SharingPolicy):
        self.uow = uow
        self.users = uow.users
        self.tasks = uow.tasks
        self.sharing = sharing

    async def register(
        self, first_name: str, last_name: str | None, user_name: str, email: str,
    ) -> User:
        email = normalize_email(email)
        if not email or not first_name.strip() or not user_name.strip():
            raise DomainError("First name, user name and email are required.")
        if await self.users.get_by_email(email) is not None:
            raise InvalidOperationError("A user with this email already exists.")
        if await self.users.exists_user_name(user_name.strip()):
            raise InvalidOperationError("This user name is already taken.")
        user = User(
            first_name=first_name.strip(),
            last_name=last_name.strip() if last_name else None,
            user_name=user_name.strip(),
            email=email,
        )
        await self.users.add(user)
        await self.uow.commit()
        logger.info("User registered", extra={"user_id": user.id})
        return user

    async def get(self, user_id: UUID) -> User:
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundError("User", str(user_id))
        return user

    async def delete(self, user_id: UUID) -> None:
        user = await self.get(user_id)
        for task_id in await self.tasks.list_ids_for_owner(user.id):
            await self.sharing.revoke_all_for_task(task_id)
        await self.sharing.revoke_all_for_user(user.id)
        await self.users.delete(user)
        await self.uow.commit()
        logger.info("User deleted", extra={"user_id": user_id})
