"""OrderedDateList: sorted, duplicate-free instants with a forward-only cursor."""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Iterable
from dataclasses import dataclass, field

from recur_expansion.instants import Instant, check_instant


@dataclass
class OrderedDateList:
    """Strictly ascending sequence of instants plus a read cursor.

    values[cursor] is the next unread instant. The cursor only moves
    forward; once it reaches len(values) the list is exhausted.
    """

    values: list[Instant] = field(default_factory=list)
    cursor: int = 0

    @classmethod
    def from_values(cls, values: Iterable[Instant]) -> OrderedDateList:
        """Build by ordered insertion. Input order does not matter."""
        dates = cls()
        for value in values:
            dates.insert(value)
        return dates

    def insert(self, value: Instant) -> int:
        """Binary-search insert. Returns the index of value.

        An instant already present is not inserted again.
        """
        check_instant(value, "value")
        idx = bisect_left(self.values, value)
        if idx < len(self.values) and self.values[idx] == value:
            return idx
        self.values.insert(idx, value)
        if idx < self.cursor:
            # Keep pointing at the same unread entry.
            self.cursor += 1
        return idx

    def seek(self, instant: Instant) -> None:
        """Move the cursor to the first entry at or after instant.

        Never moves backward.
        """
        self.cursor = max(self.cursor, bisect_left(self.values, instant))

    @property
    def current(self) -> Instant | None:
        """The unread entry at the cursor, or None when exhausted."""
        if self.cursor < len(self.values):
            return self.values[self.cursor]
        return None

    @property
    def exhausted(self) -> bool:
        return self.cursor >= len(self.values)

    def advance(self) -> None:
        """Consume the entry at the cursor."""
        if self.cursor < len(self.values):
            self.cursor += 1

    def __len__(self) -> int:
        return len(self.values)
