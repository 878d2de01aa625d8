"""Task List Schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class TaskListWrite(BaseModel):
    """Create and rename share one payload; limits are enforced by the handler."""
    title: str


class TaskListResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    owner_id: UUID
    title: str
    created_at: datetime
