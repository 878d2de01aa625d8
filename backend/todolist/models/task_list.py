"""TaskList ORM — named container of tasks owned by one user.

Invariants:
    - title is unique per owner, compared case-insensitively (functional unique index)
    - deleting a list removes its tasks (FK cascade in Postgres, explicit deletes in repositories)

Design Decisions:
    - Unique index on (owner_id, lower(title)) is the backstop for concurrent creates
      that both passed the disambiguation probe
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, ForeignKey, Index, func
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from todolist.db.base import Base


class TaskList(Base):
    """Task list owned by a user."""
    __tablename__ = "task_lists"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    owner_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )


Index(
    "uq_task_lists_owner_title",
    TaskList.owner_id,
    func.lower(TaskList.title),
    unique=True,
)
