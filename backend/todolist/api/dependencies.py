"""Request Dependencies — caller identity, pagination and handler wiring.

Invariants:
    - Every handler in one request shares one AsyncSession (FastAPI caches get_db per request)
    - Caller identity comes from the X-User-Id header and must name a registered user
    - page_size is clamped to settings.max_page_size

Design Decisions:
    - Authentication is delegated to the gateway in front of this service;
      the header carries the already-authenticated user id
    - Handlers built per request from SqlUnitOfWork: no module-level service singletons
"""

from dataclasses import dataclass
from uuid import UUID

from fastapi import Depends, Header, Query
from sqlalchemy.ext.asyncio import AsyncSession

from todolist.config import get_settings
from todolist.core.errors import AuthenticationError
from todolist.infrastructure.database import get_db
from todolist.infrastructure.repositories import SqlUnitOfWork
from todolist.services.access_authority import TaskAccessAuthority
from todolist.services.handle_comments import CommentHandlers
from todolist.services.handle_sharing import SharedTaskQueries
from todolist.services.handle_tags import TagHandlers
from todolist.services.handle_task_lists import TaskListHandlers
from todolist.services.handle_tasks import TaskHandlers
from todolist.services.handle_users import UserHandlers
from todolist.services.sharing_policy import SharingPolicy


@dataclass(frozen=True)
class Pagination:
    page: int
    page_size: int


def get_pagination(
    page: int = Query(1, ge=1),
    page_size: int | None = Query(None, ge=1),
) -> Pagination:
    settings = get_settings()
    size = page_size or settings.default_page_size
    return Pagination(page=page, page_size=min(size, settings.max_page_size))


def get_uow(db: AsyncSession = Depends(get_db)) -> SqlUnitOfWork:
    return SqlUnitOfWork(db)


async def get_current_user_id(
    x_user_id: str | None = Header(None),
    uow: SqlUnitOfWork = Depends(get_uow),
) -> UUID:
    """Resolve the caller from X-User-Id; unknown or malformed ids are 401."""
    if not x_user_id:
        raise AuthenticationError("Missing X-User-Id header.")
    try:
        user_id = UUID(x_user_id)
    except ValueError:
        raise AuthenticationError("Malformed X-User-Id header.") from None
    if await uow.users.get_by_id(user_id) is None:
        raise AuthenticationError("Unknown user.")
    return user_id


def get_authority(uow: SqlUnitOfWork = Depends(get_uow)) -> TaskAccessAuthority:
    return TaskAccessAuthority(uow.tasks, uow.grants)


def get_sharing_policy(uow: SqlUnitOfWork = Depends(get_uow)) -> SharingPolicy:
    return SharingPolicy(uow.tasks, uow.grants, uow.users, uow)


def get_user_handlers(
    uow: SqlUnitOfWork = Depends(get_uow),
    sharing: SharingPolicy = Depends(get_sharing_policy),
) -> UserHandlers:
    return UserHandlers(uow, sharing)


def get_task_list_handlers(
    uow: SqlUnitOfWork = Depends(get_uow),
    sharing: SharingPolicy = Depends(get_sharing_policy),
) -> TaskListHandlers:
    return TaskListHandlers(uow, sharing, get_settings().title_max_suffix)


def get_task_handlers(
    uow: SqlUnitOfWork = Depends(get_uow),
    sharing: SharingPolicy = Depends(get_sharing_policy),
) -> TaskHandlers:
    return TaskHandlers(uow, sharing)


def get_tag_handlers(uow: SqlUnitOfWork = Depends(get_uow)) -> TagHandlers:
    return TagHandlers(uow, get_settings().title_max_suffix)


def get_comment_handlers(
    uow: SqlUnitOfWork = Depends(get_uow),
    authority: TaskAccessAuthority = Depends(get_authority),
) -> CommentHandlers:
    return CommentHandlers(uow, authority)


def get_shared_task_queries(
    uow: SqlUnitOfWork = Depends(get_uow),
    authority: TaskAccessAuthority = Depends(get_authority),
) -> SharedTaskQueries:
    return SharedTaskQueries(uow, authority)
