"""Shared test fixtures and data loading for recur-expansion.

All test data lives in data/fixtures/ as JSON files.  This module loads
that data and exposes helper functions + pytest fixtures for the tests.

Reference anchor: Mon 2025-01-06 09:00.
"""

from __future__ import annotations

import json
from datetime import date, datetime, time, timedelta
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
FIXTURES_DIR = Path(__file__).resolve().parent.parent / "data" / "fixtures"
SCENARIOS_DIR = FIXTURES_DIR / "scenarios"


# ---------------------------------------------------------------------------
# Data loaders
# ---------------------------------------------------------------------------
def _load_json(path: Path):
    with open(path) as f:
        return json.load(f)


_reference = _load_json(FIXTURES_DIR / "reference.json")
_definitions = _load_json(FIXTURES_DIR / "definitions.json")


# ---------------------------------------------------------------------------
# Reference constants derived from reference.json
# ---------------------------------------------------------------------------
ANCHOR = datetime.fromisoformat(_reference["anchor"])
ANCHOR_DATE = date.fromisoformat(_reference["anchor_date"])


# ---------------------------------------------------------------------------
# Convenience helpers (importable by test modules)
# ---------------------------------------------------------------------------
def day(n: int, clock: str = "09:00") -> datetime:
    """Datetime n days after the anchor date, at the given wall clock.

    >>> day(0)
    datetime(2025, 1, 6, 9, 0)
    >>> day(2, "14:00")
    datetime(2025, 1, 8, 14, 0)
    """
    return datetime.combine(ANCHOR_DATE + timedelta(days=n), time.fromisoformat(clock))


def definition_data(name: str) -> dict:
    """Raw JSON dict of a named definition (a fresh copy)."""
    return json.loads(json.dumps(_definitions[name]))


def make_definition(name: str):
    """Build an EventDefinition from definitions.json by name."""
    from recur_expansion.loaders import definition_from_dict

    data = definition_data(name)
    data.setdefault("uid", name)
    return definition_from_dict(data, source=name)


def make_expansion(name: str, **kwargs):
    """Fresh RecurExpansion for a named definition."""
    from recur_expansion.expansion import RecurExpansion

    return RecurExpansion.from_definition(make_definition(name), **kwargs)


def drain(expansion, limit: int = 1000) -> list:
    """Pull up to `limit` occurrences (fails the test if more remain)."""
    values = []
    for _ in range(limit):
        value = expansion.next()
        if value is None:
            return values
        values.append(value)
    raise AssertionError(f"expansion still running after {limit} occurrences")


# ---------------------------------------------------------------------------
# Scenario loader
# ---------------------------------------------------------------------------
def load_scenarios(name: str):
    """Load a scenario file from data/fixtures/scenarios/{name}.json."""
    return _load_json(SCENARIOS_DIR / f"{name}.json")


# ---------------------------------------------------------------------------
# Step generator: a RuleGenerator test double with day arithmetic only
# ---------------------------------------------------------------------------
class StepGenerator:
    """anchor + offset_days, then every step_days; `count` values or endless."""

    def __init__(self, anchor, step_days, offset_days=0, count=None, index=0):
        self.anchor = anchor
        self.step_days = step_days
        self.offset_days = offset_days
        self.count = count
        self.index = index

    @classmethod
    def from_state(cls, state):
        from recur_expansion.instants import load_instant

        return cls(
            load_instant(state["anchor"]),
            state["step_days"],
            state["offset_days"],
            state["count"],
            state["index"],
        )

    def value_at(self, index):
        return self.anchor + timedelta(days=self.offset_days + index * self.step_days)

    @property
    def completed(self):
        return self.count is not None and self.index >= self.count

    @property
    def pending(self):
        if self.completed:
            return None
        return self.value_at(self.index)

    def advance(self):
        if not self.completed:
            self.index += 1

    def to_state(self):
        from recur_expansion.instants import dump_instant

        return {
            "anchor": dump_instant(self.anchor),
            "step_days": self.step_days,
            "offset_days": self.offset_days,
            "count": self.count,
            "index": self.index,
        }


def make_step_generator(rule, anchor):
    """make_generator hook: rule is a dict of StepGenerator keyword args."""
    return StepGenerator(anchor, **rule)


class StepSource:
    """RecurrenceSource over StepGenerator rule dicts plus explicit dates."""

    def __init__(self, rules=(), rdates=(), exdates=(), recurring=None):
        self.rules = list(rules)
        self.rdates = list(rdates)
        self.exdates = list(exdates)
        self._recurring = recurring

    def has_recurrence(self):
        if self._recurring is not None:
            return self._recurring
        return bool(self.rules or self.rdates)

    def values_of(self, name):
        from recur_expansion.definition import EXDATE, RDATE, RRULE

        return {RRULE: self.rules, RDATE: self.rdates, EXDATE: self.exdates}.get(
            name, []
        )


STEP_HOOKS = {
    "make_generator": make_step_generator,
    "load_generator": StepGenerator.from_state,
}


def make_step_expansion(rules=(), rdates=(), exdates=(), start=ANCHOR, **kwargs):
    """RecurExpansion over step rules anchored at `start`."""
    from recur_expansion.expansion import RecurExpansion

    return RecurExpansion(
        start, StepSource(rules, rdates, exdates), **STEP_HOOKS, **kwargs
    )


# ---------------------------------------------------------------------------
# pytest fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def anchor() -> datetime:
    return ANCHOR


@pytest.fixture
def weekly_expansion():
    """Weekly rule with one rdate and two exdates (4 occurrences)."""
    return make_expansion("weekly_rdate_exdate")


@pytest.fixture
def interleaved_expansion():
    """Two endless step rules: even days and odd days after the anchor."""
    return make_step_expansion(
        rules=[{"step_days": 2}, {"step_days": 2, "offset_days": 1}]
    )
