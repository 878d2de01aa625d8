"""Title Candidates — deterministic sequence of names tried during disambiguation.

Invariants:
    - First candidate is the desired title itself, unchanged
    - The n-th collision yields "<desired> (<n>)", n starting at 1
    - The suffix is always derived from the ORIGINAL desired title, never stacked
      ("Work (1)" collides -> "Work (2)", never "Work (1) (1)")

Design Decisions:
    - Generator, not list: the async loop pulls one candidate per probe round trip
    - max_suffix bounds the sequence; None means unbounded
"""

from itertools import count
from typing import Iterator


def format_candidate(desired: str, n: int) -> str:
    """Render the n-th candidate. n == 0 is the desired title."""
    if n == 0:
        return desired
    return f"{desired} ({n})"


def candidate_titles(desired: str, max_suffix: int | None = None) -> Iterator[str]:
    """Yield desired, "desired (1)", "desired (2)", ... up to max_suffix."""
    for n in count():
        if max_suffix is not None and n > max_suffix:
            return
        yield format_candidate(desired, n)
