"""Reference consumers: bounded walks over a RecurExpansion.

Rules may be infinite, so every consumer of the cursor must bound its own
loop. This module shows the two common ways to do that. It is
documentation in code form as much as a utility.
"""

from __future__ import annotations

from collections.abc import Iterator

from recur_expansion.expansion import RecurExpansion
from recur_expansion.instants import Instant


def occurrences_between(
    expansion: RecurExpansion,
    range_start: Instant,
    range_end: Instant,
) -> Iterator[Instant]:
    """Yield occurrences in [range_start, range_end).

    Occurrences before range_start are consumed and dropped. The first
    occurrence at or past range_end is consumed too and stops the walk,
    so resume from a snapshot taken before the call if it matters.

    Raises:
        UnsatisfiableExpansionError: propagated from the cursor.
    """
    while True:
        value = expansion.next()
        if value is None or value >= range_end:
            return
        if value >= range_start:
            yield value


def take(expansion: RecurExpansion, limit: int) -> list[Instant]:
    """Pull at most `limit` occurrences from the cursor."""
    results: list[Instant] = []
    while len(results) < limit:
        value = expansion.next()
        if value is None:
            break
        results.append(value)
    return results
