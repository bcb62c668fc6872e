"""Recurrence definitions: the property-access contract and a plain event type."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from recur_expansion.instants import Instant, check_instant

RRULE = "rrule"
RDATE = "rdate"
EXDATE = "exdate"
RECURRENCE_ID = "recurrence-id"


class RecurrenceSource(Protocol):
    """What the expansion engine needs from a calendar component."""

    def has_recurrence(self) -> bool:
        """True if any rrule, rdate or recurrence-id is present."""
        ...

    def values_of(self, name: str) -> list[Any]:
        """All values of one property, in no particular order."""
        ...


@dataclass(frozen=True)
class EventDefinition:
    """A recurring (or single) event reduced to its recurrence properties.

    rrules holds RRULE value strings. rdates and exdates hold instants of
    the same kind as dtstart. recurrence_id marks an overridden instance.
    """

    uid: str
    dtstart: Instant
    rrules: tuple[str, ...] = ()
    rdates: tuple[Instant, ...] = ()
    exdates: tuple[Instant, ...] = ()
    recurrence_id: Instant | None = None

    def __post_init__(self) -> None:
        check_instant(self.dtstart, "dtstart")
        for value in (*self.rdates, *self.exdates):
            check_instant(value, "date value")

    def has_recurrence(self) -> bool:
        return bool(self.rrules or self.rdates or self.recurrence_id is not None)

    def values_of(self, name: str) -> list[Any]:
        if name == RRULE:
            return list(self.rrules)
        if name == RDATE:
            return list(self.rdates)
        if name == EXDATE:
            return list(self.exdates)
        if name == RECURRENCE_ID:
            return [] if self.recurrence_id is None else [self.recurrence_id]
        return []
