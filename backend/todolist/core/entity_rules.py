"""Entity Rules — construction and update invariants for lists, tasks, tags and comments.

Invariants:
    - All functions are PURE: no IO, no clock reads (now is passed in)
    - Text fields are returned trimmed; empty or whitespace-only text is a DomainError
    - Length limits apply to the trimmed value
    - A due date may not lie in the past at the moment it is set

Design Decisions:
    - Explicit predicate functions per field over a rule-registration framework
    - Naive datetimes are treated as UTC so SQLite round-trips compare cleanly
"""

from datetime import datetime, timezone

from todolist.core.errors import DomainError

TASK_LIST_TITLE_MAX: int = 100
TASK_TITLE_MAX: int = 100
TASK_DESCRIPTION_MAX: int = 1000
TAG_NAME_MAX: int = 50
COMMENT_TEXT_MAX: int = 1000


def _require_text(value: str | None, label: str, max_length: int) -> str:
    if value is None or not value.strip():
        raise DomainError(f"{label} cannot be empty.")
    value = value.strip()
    if len(value) > max_length:
        raise DomainError(f"{label} cannot exceed {max_length} characters.")
    return value


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def validate_task_list_title(title: str | None) -> str:
    return _require_text(title, "Task list title", TASK_LIST_TITLE_MAX)


def validate_task_title(title: str | None) -> str:
    return _require_text(title, "Task title", TASK_TITLE_MAX)


def validate_tag_name(name: str | None) -> str:
    return _require_text(name, "Tag name", TAG_NAME_MAX)


def validate_comment_text(text: str | None) -> str:
    return _require_text(text, "Comment text", COMMENT_TEXT_MAX)


def validate_description(description: str | None) -> str | None:
    """Optional; blank collapses to None."""
    if description is None or not description.strip():
        return None
    description = description.strip()
    if len(description) > TASK_DESCRIPTION_MAX:
        raise DomainError(
            f"Description cannot exceed {TASK_DESCRIPTION_MAX} characters.",
        )
    return description


def validate_due_date(due_date: datetime | None, now: datetime) -> datetime | None:
    if due_date is None:
        return None
    due_date = as_utc(due_date)
    if due_date < as_utc(now):
        raise DomainError("Due date cannot be in the past.")
    return due_date

