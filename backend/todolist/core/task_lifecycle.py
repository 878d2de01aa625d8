"""Task Lifecycle — forward-only status state machine.

Invariants:
    - Status is one of TaskStatus (closed enumeration); anything else is a DomainError
    - Same-status change is a no-op: nothing on the task is touched
    - DONE is terminal: every outgoing transition is rejected
    - NOT_STARTED -> DONE is allowed (IN_PROGRESS is not a mandatory pass-through)

Design Decisions:
    - next_status is PURE: decides the target without touching the task
    - change_status applies it to anything shaped like a task (ORM row or test double)
"""

from typing import Protocol

from todolist.core.domain_types import TaskStatus
from todolist.core.errors import DomainError


class HasStatus(Protocol):
    status: str


def parse_status(value: object) -> TaskStatus:
    """Coerce a raw value into TaskStatus. Unknown values raise DomainError."""
    if isinstance(value, TaskStatus):
        return value
    try:
        return TaskStatus(value)
    except ValueError:
        raise DomainError(f"Invalid task status: {value!r}") from None


def next_status(current: object, requested: object) -> TaskStatus | None:
    """Return the status to move to, or None when no change is needed."""
    target = parse_status(requested)
    source = parse_status(current)
    if target == source:
        return None
    if source == TaskStatus.DONE:
        raise DomainError("Cannot leave a completed task.")
    return target


def change_status(task: HasStatus, new_status: object) -> bool:
    """Apply a status change to task. Returns True if the task was mutated."""
    target = next_status(task.status, new_status)
    if target is None:
        return False
    task.status = target.value
    return True
