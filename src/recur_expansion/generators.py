"""Rule generators: the single-rule expansion contract and its dateutil variant.

The merge engine only depends on the RuleGenerator protocol. Any object
with a pending value, a completed flag, advance() and to_state() can take
part in an expansion, provided a matching loader is passed for resume.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import datetime, time
from typing import Any, Protocol

from dateutil.rrule import rrulestr

from recur_expansion.instants import (
    Instant,
    check_instant,
    dump_instant,
    is_date_only,
    load_instant,
)

logger = logging.getLogger(__name__)


class RuleGenerator(Protocol):
    """Expands one repetition rule into successive instants."""

    @property
    def pending(self) -> Instant | None:
        """Current, not-yet-consumed value. None once completed."""
        ...

    @property
    def completed(self) -> bool:
        """True once the rule has no further values."""
        ...

    def advance(self) -> None:
        """Move to the next pending value."""
        ...

    def to_state(self) -> dict[str, Any]:
        """JSON-compatible state, restorable by the matching loader."""
        ...


def _as_datetime(value: Instant) -> datetime:
    if is_date_only(value):
        return datetime.combine(value, time(0, 0))
    return value  # type: ignore[return-value]


class DateutilRuleGenerator:
    """RFC 5545 RRULE generator backed by dateutil.rrule.

    Rule text is the RRULE value, e.g. 'FREQ=WEEKLY;BYDAY=MO,WE;COUNT=6'.
    The first pending value is always dtstart itself (RFC 5545 counts
    DTSTART as the first instance), followed by the rule's instants
    after dtstart. A date anchor yields dates instead of datetimes.
    """

    def __init__(
        self,
        rule: str,
        dtstart: Instant,
        resume_from: Instant | None = None,
    ) -> None:
        check_instant(dtstart, "dtstart")
        self.rule = rule
        self.dtstart = dtstart
        self._date_only = is_date_only(dtstart)

        recurrence = rrulestr(rule, dtstart=_as_datetime(dtstart))
        self._iter: Iterator[datetime]
        self._pending: Instant | None = None
        self._completed = False

        if resume_from is None or resume_from == dtstart:
            self._iter = recurrence.xafter(_as_datetime(dtstart))
            self._pending = dtstart
        else:
            check_instant(resume_from, "resume_from")
            self._iter = recurrence.xafter(_as_datetime(resume_from), inc=True)
            self.advance()

    @classmethod
    def from_state(cls, state: dict[str, Any]) -> DateutilRuleGenerator:
        """Rebuild from to_state() output.

        Resumes at the saved pending value. COUNT limits still hold since
        the rule is re-walked from its own dtstart. A completed generator has
        nothing to resume and is rejected; snapshots leave those out.
        """
        pending = state.get("pending")
        if pending is None:
            raise ValueError(
                f"Cannot resume rule {state.get('rule')!r}: state has no pending value"
            )
        dtstart = load_instant(state["dtstart"])
        return cls(state["rule"], dtstart, resume_from=load_instant(pending))

    @property
    def pending(self) -> Instant | None:
        return self._pending

    @property
    def completed(self) -> bool:
        return self._completed

    def advance(self) -> None:
        if self._completed:
            return
        value = next(self._iter, None)
        if value is None:
            self._pending = None
            self._completed = True
            logger.debug("rule %r exhausted", self.rule)
            return
        self._pending = value.date() if self._date_only else value

    def to_state(self) -> dict[str, Any]:
        return {
            "rule": self.rule,
            "dtstart": dump_instant(self.dtstart),
            "pending": None if self._pending is None else dump_instant(self._pending),
        }

    def __repr__(self) -> str:
        return (
            f"DateutilRuleGenerator(rule={self.rule!r}, "
            f"pending={self._pending!r}, completed={self._completed})"
        )
