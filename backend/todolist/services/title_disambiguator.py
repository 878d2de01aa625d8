"""Title Disambiguator — resolves per-owner naming collisions with a numeric suffix.

Invariants:
    - Returns the first candidate the probe reports as free: "Work", "Work (1)", "Work (2)", ...
    - Probe calls are awaited one at a time (one round trip per collision, no batching)
    - Never writes: the caller persists the returned title
    - Free only at probe time; the storage unique index catches concurrent winners

Design Decisions:
    - Candidate sequence lives in core/title_candidates.py (pure); this module only drives the probe
    - max_suffix is optional; when set and exhausted, InvalidOperationError instead of looping forever
"""

import logging

from todolist.core.domain_types import TitleExistsProbe
from todolist.core.errors import InvalidOperationError
from todolist.core.title_candidates import candidate_titles

logger = logging.getLogger(__name__)


async def resolve_unique_title(
    desired_title: str,
    exists: TitleExistsProbe,
    max_suffix: int | None = None,
) -> str:
    """Return desired_title or the first free "desired_title (n)"."""
    for candidate in candidate_titles(desired_title, max_suffix):
        if not await exists(candidate):
            if candidate != desired_title:
                logger.info(
                    f"Title '{desired_title}' taken, using '{candidate}'",
                    extra={"title": candidate},
                )
            return candidate
    raise InvalidOperationError(
        f"Too many items named '{desired_title}'. Choose a different name.",
    )
