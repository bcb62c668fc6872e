"""RecurExpansion: resumable forward cursor over a recurring definition.

Merges any number of rule generators with the explicit extra dates (rdate),
subtracts the exclusion dates (exdate), and hands out one instant per
next() call. State can be captured with snapshot() and continued later
with RecurExpansion.from_snapshot().
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import Any

from recur_expansion.dates import OrderedDateList
from recur_expansion.definition import (
    EXDATE,
    RDATE,
    RRULE,
    EventDefinition,
    RecurrenceSource,
)
from recur_expansion.generators import DateutilRuleGenerator, RuleGenerator
from recur_expansion.instants import Instant, check_instant, copy_instant
from recur_expansion.types import ExpansionSnapshot, UnsatisfiableExpansionError

logger = logging.getLogger(__name__)

# Attempts per next() call before giving up. Rules may be infinite, so a
# dense exclusion list would otherwise skip forever.
DEFAULT_MAX_TRIES = 500

GeneratorFactory = Callable[[Any, Instant], RuleGenerator]
GeneratorLoader = Callable[[dict[str, Any]], RuleGenerator]


class RecurExpansion:
    """Forward-only occurrence cursor. Not thread-safe; one owner per cursor.

    Fresh mode builds generators and date lists from a RecurrenceSource.
    Restored mode (from_snapshot) takes all state from the snapshot and
    never looks at the source again.

    The anchor is never produced by a rule generator: each generator is
    advanced once at construction. Callers that want the anchor get it
    from the definition itself. Only a non-recurring definition, or an
    rdate equal to the anchor, makes next() return the anchor.
    """

    def __init__(
        self,
        start: Instant,
        source: RecurrenceSource,
        *,
        max_tries: int = DEFAULT_MAX_TRIES,
        make_generator: GeneratorFactory = DateutilRuleGenerator,
        load_generator: GeneratorLoader = DateutilRuleGenerator.from_state,
    ) -> None:
        self._configure(start, max_tries, make_generator, load_generator)
        self._init_from_source(source)

    def _configure(
        self,
        start: Instant,
        max_tries: int,
        make_generator: GeneratorFactory,
        load_generator: GeneratorLoader,
    ) -> None:
        check_instant(start, "start")
        if max_tries < 1:
            raise ValueError(f"max_tries must be >= 1, got {max_tries}")

        self.start: Instant = copy_instant(start)
        self.last: Instant = copy_instant(start)
        self.max_tries = max_tries
        self.generators: list[RuleGenerator] = []
        self.extra_dates = OrderedDateList()
        self.excluded_dates = OrderedDateList()
        self.done = False
        self._make_generator = make_generator
        self._load_generator = load_generator

    @classmethod
    def from_definition(
        cls, definition: EventDefinition, **kwargs: Any
    ) -> RecurExpansion:
        """Fresh expansion anchored at definition.dtstart."""
        return cls(definition.dtstart, definition, **kwargs)

    @classmethod
    def from_snapshot(
        cls,
        snapshot: ExpansionSnapshot | dict[str, Any],
        *,
        max_tries: int = DEFAULT_MAX_TRIES,
        make_generator: GeneratorFactory = DateutilRuleGenerator,
        load_generator: GeneratorLoader = DateutilRuleGenerator.from_state,
    ) -> RecurExpansion:
        """Rebuild an expansion exactly as it was when snapshot() was called."""
        if isinstance(snapshot, dict):
            snapshot = ExpansionSnapshot.from_dict(snapshot)

        expansion = cls.__new__(cls)
        expansion._configure(snapshot.start, max_tries, make_generator, load_generator)
        expansion.last = copy_instant(snapshot.last)
        expansion.generators = [load_generator(state) for state in snapshot.generators]
        expansion.extra_dates = OrderedDateList(
            values=list(snapshot.extra_dates), cursor=snapshot.extra_cursor
        )
        expansion.excluded_dates = OrderedDateList(
            values=list(snapshot.excluded_dates), cursor=snapshot.exclude_cursor
        )
        expansion.done = snapshot.done
        return expansion

    def _init_from_source(self, source: RecurrenceSource) -> None:
        """Classify the source and build generators and date lists."""
        if not source.has_recurrence():
            # Single occurrence: the anchor, served through the extra-date slot.
            self.extra_dates = OrderedDateList(values=[copy_instant(self.start)])
            logger.debug("non-recurring definition at %s", self.start)
            return

        for rule in source.values_of(RRULE):
            generator = self._make_generator(rule, self.start)
            # Skip the anchor; the caller already has it.
            generator.advance()
            self.generators.append(generator)

        rdates = source.values_of(RDATE)
        if rdates:
            self.extra_dates = OrderedDateList.from_values(rdates)
            self.extra_dates.seek(self.start)

        exdates = source.values_of(EXDATE)
        if exdates:
            self.excluded_dates = OrderedDateList.from_values(exdates)
            self.excluded_dates.seek(self.start)

        logger.debug(
            "expansion at %s: %d rules, %d extra dates, %d excluded dates",
            self.start,
            len(self.generators),
            len(self.extra_dates),
            len(self.excluded_dates),
        )

    # ------------------------------------------------------------------
    # Merge-select
    # ------------------------------------------------------------------

    def next(self) -> Instant | None:
        """Return the next occurrence, or None once the expansion is done.

        Raises UnsatisfiableExpansionError if max_tries candidates in a row
        are rejected (excluded or duplicate).
        """
        if self.done:
            return None

        for _ in range(self.max_tries):
            extra = self.extra_dates.current
            generator = self._earliest_generator()

            if extra is None and generator is None:
                self._finish()
                return None

            if generator is not None and (extra is None or extra > generator.pending):
                candidate = generator.pending
                generator.advance()
                if not self.last < candidate:
                    # Already emitted, e.g. via an rdate tie or another rule.
                    logger.debug("skipping duplicate %s", candidate)
                    continue
            else:
                candidate = extra
                self.extra_dates.advance()

            self.last = copy_instant(candidate)

            if self._is_excluded(self.last):
                logger.debug("excluded %s", self.last)
                continue

            return self.last

        # The last rejected candidate may have used up every source.
        if self.extra_dates.current is None and self._earliest_generator() is None:
            self._finish()
            return None

        raise UnsatisfiableExpansionError(self.start, self.last, self.max_tries)

    def _finish(self) -> None:
        self.done = True
        logger.debug("expansion at %s complete", self.start)

    def _earliest_generator(self) -> RuleGenerator | None:
        """Drop completed generators; return the one with the earliest value.

        Ties go to the first generator in list order.
        """
        chosen: RuleGenerator | None = None
        live: list[RuleGenerator] = []
        for generator in self.generators:
            if generator.completed:
                logger.debug("dropping completed generator %r", generator)
                continue
            live.append(generator)
            if chosen is None or generator.pending < chosen.pending:
                chosen = generator
        self.generators = live
        return chosen

    def _is_excluded(self, value: Instant) -> bool:
        """Advance the exclusion cursor to value; consume it on a match."""
        excluded = self.excluded_dates
        while excluded.current is not None and excluded.current < value:
            excluded.advance()
        if excluded.current is not None and excluded.current == value:
            excluded.advance()
            return True
        return False

    def __iter__(self) -> Iterator[Instant]:
        return self

    def __next__(self) -> Instant:
        value = self.next()
        if value is None:
            raise StopIteration
        return value

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def snapshot(self) -> ExpansionSnapshot:
        """Immutable capture of all state needed to resume."""
        return ExpansionSnapshot(
            start=copy_instant(self.start),
            last=copy_instant(self.last),
            generators=tuple(
                g.to_state() for g in self.generators if not g.completed
            ),
            extra_dates=tuple(self.extra_dates.values),
            extra_cursor=self.extra_dates.cursor,
            excluded_dates=tuple(self.excluded_dates.values),
            exclude_cursor=self.excluded_dates.cursor,
            done=self.done,
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible snapshot."""
        return self.snapshot().to_dict()

    def copy(self) -> RecurExpansion:
        """Independent branch: advancing the copy leaves self untouched."""
        return type(self).from_snapshot(
            self.snapshot(),
            max_tries=self.max_tries,
            make_generator=self._make_generator,
            load_generator=self._load_generator,
        )

    def __repr__(self) -> str:
        return (
            f"RecurExpansion(start={self.start!r}, last={self.last!r}, "
            f"generators={len(self.generators)}, done={self.done})"
        )
