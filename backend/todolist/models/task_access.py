"""TaskAccess ORM — a grant binding one non-owner user to one task.

Invariants:
    - Composite primary key (task_id, user_id): at most one grant per pair
    - user_id never equals the task owner (enforced by the sharing policy)
    - No payload beyond the pair and its creation time

Design Decisions:
    - Primary key doubles as the uniqueness backstop for concurrent share requests
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from todolist.db.base import Base


class TaskAccess(Base):
    """User-task access grant."""
    __tablename__ = "task_accesses"

    task_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("tasks.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
