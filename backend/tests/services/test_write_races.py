"""Write Races — storage constraints back up check-then-act rules; cancelled requests persist nothing.

Tests cover:
    - two sessions both pass the duplicate-grant check; the second commit is ConcurrencyError
    - two sessions both see "Work"/"work" as free; the second insert is ConcurrencyError
    - a request cancelled while committing leaves no task list behind
"""

import asyncio

import pytest

from todolist.core.errors import ConcurrencyError
from todolist.infrastructure.database import DatabaseSessionManager
from todolist.infrastructure.repositories import SqlTaskListRepository, SqlUnitOfWork
from todolist.models.task import Task
from todolist.models.task_list import TaskList
from todolist.models.user import User
from todolist.services.handle_task_lists import TaskListHandlers
from todolist.services.sharing_policy import SharingPolicy


def _sharing(uow: SqlUnitOfWork) -> SharingPolicy:
    return SharingPolicy(uow.tasks, uow.grants, uow.users, uow)


async def _user(uow, name: str) -> User:
    user = User(first_name=name, user_name=name, email=f"{name}@example.com")
    await uow.users.add(user)
    await uow.commit()
    return user


@pytest.fixture
async def owner(test_db):
    return await _user(SqlUnitOfWork(test_db), "olga")


async def test_concurrent_duplicate_grant_hits_primary_key(test_db, test_session_factory, owner):
    seed = SqlUnitOfWork(test_db)
    grantee = await _user(seed, "fred")
    task_list = TaskList(owner_id=owner.id, title="Work")
    await seed.task_lists.add(task_list)
    task = Task(owner_id=owner.id, task_list_id=task_list.id, title="Report")
    await seed.tasks.add(task)
    await seed.commit()

    async with test_session_factory() as db_a, test_session_factory() as db_b:
        uow_a, uow_b = SqlUnitOfWork(db_a), SqlUnitOfWork(db_b)
        await _sharing(uow_a).can_grant_access(task.id, owner.id, grantee)
        await _sharing(uow_b).can_grant_access(task.id, owner.id, grantee)

        await uow_a.grants.insert(task.id, grantee.id)
        await uow_a.commit()

        await uow_b.grants.insert(task.id, grantee.id)
        with pytest.raises(ConcurrencyError):
            await uow_b.commit()

    async with test_session_factory() as db:
        assert await SqlUnitOfWork(db).grants.exists(task.id, grantee.id)


async def test_concurrent_title_differing_in_case_hits_unique_index(test_session_factory, owner):
    async with test_session_factory() as db_a, test_session_factory() as db_b:
        uow_a, uow_b = SqlUnitOfWork(db_a), SqlUnitOfWork(db_b)
        assert not await uow_a.task_lists.exists_title_for_owner("Work", owner.id)
        assert not await uow_b.task_lists.exists_title_for_owner("work", owner.id)

        await uow_a.task_lists.add(TaskList(owner_id=owner.id, title="Work"))
        await uow_a.commit()

        with pytest.raises(ConcurrencyError):
            await uow_b.task_lists.add(TaskList(owner_id=owner.id, title="work"))
            await uow_b.commit()

    async with test_session_factory() as db:
        lists, total = await SqlTaskListRepository(db).list_for_owner(owner.id, 1, 10)
        assert total == 1
        assert [tl.title for tl in lists] == ["Work"]


async def test_cancelled_create_persists_nothing(test_engine, test_session_factory, owner):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    committing = asyncio.Event()

    async def slow_commit():
        committing.set()
        await asyncio.sleep(60)

    async def request():
        async with manager.session() as db:
            uow = SqlUnitOfWork(db)
            uow.commit = slow_commit
            await TaskListHandlers(uow, _sharing(uow)).create(owner.id, "Work")

    pending = asyncio.create_task(request())
    await committing.wait()
    pending.cancel()
    with pytest.raises(asyncio.CancelledError):
        await pending

    async with test_session_factory() as db:
        assert not await SqlTaskListRepository(db).exists_title_for_owner("Work", owner.id)
