"""User ORM — account that owns lists, tasks and tags and may hold access grants.

Invariants:
    - email is unique and stored lower-cased (lookups normalize the same way)
    - user_name is unique

Design Decisions:
    - No credentials column: authentication lives outside this service
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from todolist.db.base import Base


class User(Base):
    """Registered user."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    user_name: Mapped[str] = mapped_column(
        String(100), nullable=False, unique=True,
    )
    email: Mapped[str] = mapped_column(
        String(254), nullable=False, unique=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
