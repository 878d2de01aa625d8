"""Sharing Rule Enforcement — pure checks behind granting and revoking task access.

Invariants:
    - All functions are PURE: no IO, no async, no DB
    - Each check raises its typed error on violation and returns None otherwise
    - The grant checks are evaluated in a fixed order; the first failure wins:
        1. candidate user resolved        (ValidationFailedError)
        2. task exists                    (ValidationFailedError)
        3. requester owns the task        (ValidationFailedError)
        4. candidate is not the owner     (ValidationFailedError)
        5. no grant exists for the pair   (InvalidOperationError)

Design Decisions:
    - Facts (owner id, grant existence) are resolved by the shell and passed in,
      so the ordering can be tested without any store
    - Checks 2-4 share one message for "not yours / not there": a non-owner cannot
      probe which task ids exist
"""

from uuid import UUID

from todolist.core.errors import InvalidOperationError, ValidationFailedError

CANNOT_GRANT_MESSAGE = "Cannot grant access to this task."
NOT_OWNER_MESSAGE = "Current user doesn't have access to this task."
SELF_SHARE_MESSAGE = "A task cannot be shared with its owner."
ALREADY_SHARED_MESSAGE = "Task already shared with this user."


def normalize_email(email: str) -> str:
    """Emails are matched trimmed and lower-cased."""
    return email.strip().lower()


def check_candidate_resolved(candidate_id: UUID | None) -> None:
    """Rule 1: the user being granted access must exist."""
    if candidate_id is None:
        raise ValidationFailedError(CANNOT_GRANT_MESSAGE)


def check_requester_is_owner(owner_id: UUID | None, requester_id: UUID) -> None:
    """Rules 2-3: task must exist and belong to the requester."""
    if owner_id is None or owner_id != requester_id:
        raise ValidationFailedError(NOT_OWNER_MESSAGE)


def check_not_self_share(owner_id: UUID, candidate_id: UUID) -> None:
    """Rule 4: the owner already has access and can never hold a grant."""
    if owner_id == candidate_id:
        raise ValidationFailedError(SELF_SHARE_MESSAGE)


def check_not_already_shared(grant_exists: bool) -> None:
    """Rule 5: at most one grant per (task, user)."""
    if grant_exists:
        raise InvalidOperationError(ALREADY_SHARED_MESSAGE)


def validate_grant_preconditions(
    owner_id: UUID | None, requester_id: UUID, candidate_id: UUID,
) -> None:
    """Chain rules 2-4 once the task owner is known."""
    check_requester_is_owner(owner_id, requester_id)
    check_not_self_share(owner_id, candidate_id)
