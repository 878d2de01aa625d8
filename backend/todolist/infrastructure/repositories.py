"""SQL Repositories — SQLAlchemy implementations of the core repository Protocols.

Invariants:
    - Repositories only stage changes on the AsyncSession; SqlUnitOfWork.commit() makes them durable
    - find_owner raises ResourceNotFoundError for unknown tasks (never returns None)
    - Deletes of tasks, lists and users are explicit bulk statements in child-first order,
      so they behave the same with or without database-level FK cascades
    - Task list title probes compare case-insensitively; tag name probes compare exactly

Design Decisions:
    - One class per aggregate, each taking the request's AsyncSession
    - Sort dispatch is a match over TaskSortBy with an explicit default (creation order)
"""

import logging
from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, exists, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from todolist.core.domain_types import TaskSortBy, TaskStatus
from todolist.core.errors import ConcurrencyError, ResourceNotFoundError
from todolist.models.comment import Comment
from todolist.models.tag import Tag
from todolist.models.task import Task
from todolist.models.task_access import TaskAccess
from todolist.models.task_list import TaskList
from todolist.models.user import User

logger = logging.getLogger(__name__)


def _offset(page: int, page_size: int) -> int:
    return (page - 1) * page_size


async def _flush(db: AsyncSession) -> None:
    """Flush staged rows so generated ids exist; constraint hits become ConcurrencyError."""
    try:
        await db.flush()
    except IntegrityError as e:
        await db.rollback()
        logger.warning(f"Flush rejected by constraint: {e.orig}")
        raise ConcurrencyError(
            "The change conflicts with a concurrent update, please retry.",
        )


def task_order_by(sort_by: TaskSortBy | None, ascending: bool):
    """Resolve the ORDER BY column for a task listing."""
    match sort_by:
        case TaskSortBy.CREATED_AT:
            column = Task.created_at
        case TaskSortBy.DUE_DATE:
            column = Task.due_date
        case TaskSortBy.TITLE:
            column = Task.title
        case TaskSortBy.STATUS:
            column = Task.status
        case _:
            return Task.created_at.asc()
    return column.asc() if ascending else column.desc()


class SqlTaskRepository:
    """Task persistence."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_owner(self, task_id: UUID) -> UUID:
        owner_id = await self.db.scalar(
            select(Task.owner_id).where(Task.id == task_id),
        )
        if owner_id is None:
            raise ResourceNotFoundError("Task", str(task_id))
        return owner_id

    async def get(self, task_id: UUID) -> Task | None:
        return await self.db.get(Task, task_id)

    async def get_owned(self, task_id: UUID, owner_id: UUID) -> Task | None:
        result = await self.db.execute(
            select(Task)
            .where(Task.id == task_id)
            .where(Task.owner_id == owner_id)
        )
        return result.scalar_one_or_none()

    async def add(self, task: Task) -> None:
        self.db.add(task)
        await _flush(self.db)

    async def delete(self, task: Task) -> None:
        await self.db.execute(delete(Comment).where(Comment.task_id == task.id))
        await self.db.execute(delete(Task).where(Task.id == task.id))

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
        query = (
            select(Task)
            .where(Task.owner_id == owner_id)
            .where(Task.task_list_id == task_list_id)
        )
        if statuses:
            query = query.where(Task.status.in_([s.value for s in statuses]))
        if due_after is not None:
            query = query.where(Task.due_date >= due_after)
        if due_before is not None:
            query = query.where(Task.due_date <= due_before)
        query = query.order_by(task_order_by(sort_by, ascending))
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def search_by_title(self, owner_id: UUID, text: str) -> list[Task]:
        result = await self.db.execute(
            select(Task)
            .where(Task.owner_id == owner_id)
            .where(Task.title.icontains(text, autoescape=True))
            .order_by(Task.created_at.asc())
        )
        return list(result.scalars().all())

    async def list_overdue(
        self, owner_id: UUID, task_list_id: UUID, now: datetime,
    ) -> list[Task]:
        result = await self.db.execute(
            select(Task)
            .where(Task.owner_id == owner_id)
            .where(Task.task_list_id == task_list_id)
            .where(Task.due_date.isnot(None))
            .where(Task.due_date < now)
            .order_by(Task.created_at.asc())
        )
        return list(result.scalars().all())

    async def list_ids_for_owner(self, owner_id: UUID) -> list[UUID]:
        result = await self.db.execute(
            select(Task.id).where(Task.owner_id == owner_id),
        )
        return list(result.scalars().all())

    async def list_ids_in_task_list(self, task_list_id: UUID) -> list[UUID]:
        result = await self.db.execute(
            select(Task.id).where(Task.task_list_id == task_list_id),
        )
        return list(result.scalars().all())

    async def clear_tag(self, tag_id: UUID) -> int:
        result = await self.db.execute(
            update(Task).where(Task.tag_id == tag_id).values(tag_id=None),
        )
        return result.rowcount


class SqlGrantRepository:
    """Task access grant persistence."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def exists(self, task_id: UUID, user_id: UUID) -> bool:
        return bool(await self.db.scalar(
            select(exists().where(
                TaskAccess.task_id == task_id, TaskAccess.user_id == user_id,
            )),
        ))

    async def insert(self, task_id: UUID, user_id: UUID) -> None:
        self.db.add(TaskAccess(task_id=task_id, user_id=user_id))

    async def delete(self, task_id: UUID, user_id: UUID) -> int:
        result = await self.db.execute(
            delete(TaskAccess)
            .where(TaskAccess.task_id == task_id)
            .where(TaskAccess.user_id == user_id)
        )
        return result.rowcount

    async def delete_all_for_task(self, task_id: UUID) -> int:
        result = await self.db.execute(
            delete(TaskAccess).where(TaskAccess.task_id == task_id),
        )
        return result.rowcount

    async def delete_all_for_user(self, user_id: UUID) -> int:
        result = await self.db.execute(
            delete(TaskAccess).where(TaskAccess.user_id == user_id),
        )
        return result.rowcount

    async def list_users_for_task(
        self, task_id: UUID, page: int, page_size: int,
    ) -> tuple[list[User], int]:
        total = await self.db.scalar(
            select(func.count()).select_from(TaskAccess)
            .where(TaskAccess.task_id == task_id),
        )
        result = await self.db.execute(
            select(User)
            .join(TaskAccess, TaskAccess.user_id == User.id)
            .where(TaskAccess.task_id == task_id)
            .order_by(TaskAccess.created_at.asc())
            .offset(_offset(page, page_size))
            .limit(page_size)
        )
        return list(result.scalars().all()), total or 0

    async def list_tasks_for_user(
        self, user_id: UUID, page: int, page_size: int,
    ) -> tuple[list[Task], int]:
        total = await self.db.scalar(
            select(func.count()).select_from(TaskAccess)
            .where(TaskAccess.user_id == user_id),
        )
        result = await self.db.execute(
            select(Task)
            .join(TaskAccess, TaskAccess.task_id == Task.id)
            .where(TaskAccess.user_id == user_id)
            .order_by(Task.created_at.asc())
            .offset(_offset(page, page_size))
            .limit(page_size)
        )
        return list(result.scalars().all()), total or 0


class SqlTaskListRepository:
    """Task list persistence."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def exists_title_for_owner(
        self, title: str, owner_id: UUID, exclude_id: UUID | None = None,
    ) -> bool:
        condition = [
            TaskList.owner_id == owner_id,
            func.lower(TaskList.title) == func.lower(title),
        ]
        if exclude_id is not None:
            condition.append(TaskList.id != exclude_id)
        return bool(await self.db.scalar(select(exists().where(*condition))))

    async def get_owned(self, task_list_id: UUID, owner_id: UUID) -> TaskList | None:
        result = await self.db.execute(
            select(TaskList)
            .where(TaskList.id == task_list_id)
            .where(TaskList.owner_id == owner_id)
        )
        return result.scalar_one_or_none()

    async def add(self, task_list: TaskList) -> None:
        self.db.add(task_list)
        await _flush(self.db)

    async def delete(self, task_list: TaskList) -> None:
        task_ids = select(Task.id).where(Task.task_list_id == task_list.id)
        await self.db.execute(delete(Comment).where(Comment.task_id.in_(task_ids)))
        await self.db.execute(delete(Task).where(Task.task_list_id == task_list.id))
        await self.db.execute(delete(TaskList).where(TaskList.id == task_list.id))

    async def list_for_owner(
        self, owner_id: UUID, page: int, page_size: int,
    ) -> tuple[list[TaskList], int]:
        total = await self.db.scalar(
            select(func.count()).select_from(TaskList)
            .where(TaskList.owner_id == owner_id),
        )
        result = await self.db.execute(
            select(TaskList)
            .where(TaskList.owner_id == owner_id)
            .order_by(TaskList.created_at.asc())
            .offset(_offset(page, page_size))
            .limit(page_size)
        )
        return list(result.scalars().all()), total or 0


class SqlTagRepository:
    """Tag persistence."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def exists_name_for_owner(self, name: str, owner_id: UUID) -> bool:
        return bool(await self.db.scalar(
            select(exists().where(Tag.owner_id == owner_id, Tag.name == name)),
        ))

    async def get_owned(self, tag_id: UUID, owner_id: UUID) -> Tag | None:
        result = await self.db.execute(
            select(Tag).where(Tag.id == tag_id).where(Tag.owner_id == owner_id),
        )
        return result.scalar_one_or_none()

    async def add(self, tag: Tag) -> None:
        self.db.add(tag)
        await _flush(self.db)

    async def delete(self, tag: Tag) -> None:
        await self.db.execute(delete(Tag).where(Tag.id == tag.id))

    async def list_for_owner(
        self, owner_id: UUID, page: int, page_size: int,
    ) -> tuple[list[Tag], int]:
        total = await self.db.scalar(
            select(func.count()).select_from(Tag).where(Tag.owner_id == owner_id),
        )
        result = await self.db.execute(
            select(Tag)
            .where(Tag.owner_id == owner_id)
            .order_by(Tag.name.asc())
            .offset(_offset(page, page_size))
            .limit(page_size)
        )
        return list(result.scalars().all()), total or 0


class SqlCommentRepository:
    """Comment persistence."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, comment_id: UUID) -> Comment | None:
        return await self.db.get(Comment, comment_id)

    async def add(self, comment: Comment) -> None:
        self.db.add(comment)
        await _flush(self.db)

    async def delete(self, comment: Comment) -> None:
        await self.db.execute(delete(Comment).where(Comment.id == comment.id))

    async def list_for_task(self, task_id: UUID) -> list[Comment]:
        result = await self.db.execute(
            select(Comment)
            .where(Comment.task_id == task_id)
            .order_by(Comment.created_at.asc())
        )
        return list(result.scalars().all())


class SqlUserRepository:
    """User persistence."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id: UUID) -> User | None:
        return await self.db.get(User, user_id)

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(
            select(User).where(User.email == email.strip().lower()),
        )
        return result.scalar_one_or_none()

    async def exists_user_name(self, user_name: str) -> bool:
        return bool(await self.db.scalar(
            select(exists().where(User.user_name == user_name)),
        ))

    async def add(self, user: User) -> None:
        self.db.add(user)
        await _flush(self.db)

    async def delete(self, user: User) -> None:
        """Remove the user and everything they own or authored."""
        owned_tasks = select(Task.id).where(Task.owner_id == user.id)
        await self.db.execute(delete(Comment).where(Comment.task_id.in_(owned_tasks)))
        await self.db.execute(delete(Comment).where(Comment.author_id == user.id))
        await self.db.execute(delete(Task).where(Task.owner_id == user.id))
        await self.db.execute(delete(TaskList).where(TaskList.owner_id == user.id))
        await self.db.execute(delete(Tag).where(Tag.owner_id == user.id))
        await self.db.execute(delete(User).where(User.id == user.id))


class SqlUnitOfWork:
    """Commit boundary for one request; all repositories share its session."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.tasks = SqlTaskRepository(db)
        self.grants = SqlGrantRepository(db)
        self.task_lists = SqlTaskListRepository(db)
        self.tags = SqlTagRepository(db)
        self.comments = SqlCommentRepository(db)
        self.users = SqlUserRepository(db)

    async def commit(self) -> None:
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"Commit rejected by constraint: {e.orig}")
            raise ConcurrencyError(
                "The change conflicts with a concurrent update, please retry.",
            )
