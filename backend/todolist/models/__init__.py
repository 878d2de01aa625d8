"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - User is the root of ownership; every list, task and tag carries owner_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata knows every table before
      create_all or Alembic autogenerate runs
"""

from todolist.models.user import User  # noqa: F401
from todolist.models.task_list import TaskList  # noqa: F401
from todolist.models.task import Task  # noqa: F401
from todolist.models.tag import Tag  # noqa: F401
from todolist.models.comment import Comment  # noqa: F401
from todolist.models.task_access import TaskAccess  # noqa: F401
