"""Task Schemas — create/update payloads, status change, and task view.

Invariants:
    - TaskStatusChange.status is a raw string: unknown values reach the lifecycle
      and fail there as a DomainError
    - Query filters use TaskStatus / TaskSortBy so FastAPI rejects unknown values
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class TaskWrite(BaseModel):
    """Create and update details share one payload."""
    title: str
    description: str | None = None
    due_date: datetime | None = None


class TaskStatusChange(BaseModel):
    status: str


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    owner_id: UUID
    task_list_id: UUID
    title: str
    description: str | None = None
    due_date: datetime | None = None
    status: str
    tag_id: UUID | None = None
    created_at: datetime


class OverdueDeletion(BaseModel):
    deleted: int
