#!/usr/bin/env python
"""Visual verification report for recur-expansion.

Run:  python scripts/verify.py

Produces a formatted report showing:
  1. Fixture definitions (rules, extra dates, exclusions)
  2. Expansion scenarios -- expected vs. actual occurrence tables
  3. Resume check -- snapshot mid-way, restore, compare the continuation
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths and data loading
# ---------------------------------------------------------------------------
ROOT = Path(__file__).resolve().parent.parent
FIXTURES = ROOT / "data" / "fixtures"
SCENARIOS = FIXTURES / "scenarios"

sys.path.insert(0, str(ROOT / "src"))

from recur_expansion.debug import show_occurrences
from recur_expansion.expansion import RecurExpansion
from recur_expansion.instants import dump_instant, load_instant
from recur_expansion.loaders import definition_from_dict
from recur_expansion.types import UnsatisfiableExpansionError
from recur_expansion.window import take


def _load(path: Path):
    with open(path) as f:
        return json.load(f)


_defs = _load(FIXTURES / "definitions.json")
_scenarios = _load(SCENARIOS / "expansion.json")

# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------
WIDTH = 90


def banner(title: str):
    print()
    print("=" * WIDTH)
    print(f"  {title}")
    print("=" * WIDTH)


def heading(title: str):
    print()
    print(f"  {title}")
    print(f"  {'-' * (len(title) + 2)}")


def table(headers: list[str], rows: list[list[str]], indent: int = 4):
    """Print a formatted table with auto-sized columns."""
    col_widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            col_widths[i] = max(col_widths[i], len(cell))

    pad = " " * indent
    fmt = pad + "  ".join(f"{{:<{w}}}" for w in col_widths)
    sep = pad + "  ".join("-" * w for w in col_widths)

    print(fmt.format(*headers))
    print(sep)
    for row in rows:
        padded = row + [""] * (len(headers) - len(row))
        print(fmt.format(*padded))


def _expansion(name: str) -> RecurExpansion:
    data = dict(_defs[name], uid=name)
    return RecurExpansion.from_definition(definition_from_dict(data, source=name))


# ---------------------------------------------------------------------------
# Section 1: Definitions
# ---------------------------------------------------------------------------
def section_definitions():
    banner("FIXTURE DEFINITIONS")
    rows = []
    for name, data in _defs.items():
        rows.append([
            name,
            data["dtstart"],
            str(len(data.get("rrule", []))),
            str(len(data.get("rdate", []))),
            str(len(data.get("exdate", []))),
        ])
    table(["name", "dtstart", "rules", "rdates", "exdates"], rows)

    heading("Next occurrences: weekly_rdate_exdate")
    show_occurrences(_expansion("weekly_rdate_exdate"), limit=6)


# ---------------------------------------------------------------------------
# Section 2: Scenarios
# ---------------------------------------------------------------------------
def section_scenarios() -> int:
    banner("EXPANSION SCENARIOS")
    failures = 0
    for spec in _scenarios:
        heading(f"{spec['id']}: {spec['notes']}")
        expansion = _expansion(spec["definition"])
        try:
            actual = take(expansion, spec.get("limit", 100))
        except UnsatisfiableExpansionError as e:
            print(f"    ERROR: {e}")
            failures += 1
            continue

        expected = [load_instant(v) for v in spec["expected"]]
        rows = []
        for i in range(max(len(expected), len(actual))):
            exp = dump_instant(expected[i]) if i < len(expected) else "-"
            act = dump_instant(actual[i]) if i < len(actual) else "-"
            rows.append([str(i + 1), exp, act, "ok" if exp == act else "MISMATCH"])
        table(["#", "expected", "actual", ""], rows)
        if actual != expected:
            failures += 1
    return failures


# ---------------------------------------------------------------------------
# Section 3: Resume
# ---------------------------------------------------------------------------
def section_resume() -> int:
    banner("RESUME CHECK")
    failures = 0
    rows = []
    for name in _defs:
        original = _expansion(name)
        take(original, 2)
        restored = RecurExpansion.from_snapshot(
            json.loads(json.dumps(original.to_dict()))
        )
        same = take(restored, 10) == take(original, 10)
        rows.append([name, "ok" if same else "MISMATCH"])
        if not same:
            failures += 1
    table(["definition", "continuation"], rows)
    return failures


def main() -> int:
    section_definitions()
    failures = section_scenarios() + section_resume()
    banner(f"{failures} failure(s)")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
