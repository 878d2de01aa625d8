"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, TaskId, TaskListId, TagId, CommentId wrap UUIDs
    - TaskStatus is a closed enumeration of exactly 3 states
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders, stored as-is in String columns
"""

from enum import Enum
from typing import Awaitable, Callable, NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
TaskId = NewType("TaskId", UUID)
TaskListId = NewType("TaskListId", UUID)
TagId = NewType("TagId", UUID)
CommentId = NewType("CommentId", UUID)


# ─── Probes ──────────────────────────────────────────────────────

# Existence probe for one owner and one entity kind (list title or tag name)
TitleExistsProbe = Callable[[str], Awaitable[bool]]


# ─── Enums ───────────────────────────────────────────────────────

class TaskStatus(str, Enum):
    """Task lifecycle states — maps to DB `status` column."""
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class TaskSortBy(str, Enum):
    """Sort keys accepted by the task listing query."""
    CREATED_AT = "created_at"
    DUE_DATE = "due_date"
    TITLE = "title"
    STATUS = "status"
