"""Data loading utilities for event definitions and expansion snapshots."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from recur_expansion.definition import EventDefinition
from recur_expansion.expansion import RecurExpansion
from recur_expansion.instants import load_instant
from recur_expansion.schema import validate_definition


def definition_from_dict(data: dict[str, Any], source: str = "<dict>") -> EventDefinition:
    """Build an EventDefinition from its JSON form.

    {
        "uid": "...",
        "dtstart": "2025-01-06T09:00:00",
        "rrule": ["FREQ=WEEKLY;BYDAY=MO"],
        "rdate": ["2025-01-08T09:00:00"],
        "exdate": ["2025-01-13T09:00:00"]
    }

    Raises ValueError if validation fails.
    """
    errors = validate_definition(data)
    if errors:
        raise ValueError(
            f"Validation errors in {source}:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )

    recurrence_id = data.get("recurrence-id")
    return EventDefinition(
        uid=data.get("uid", source),
        dtstart=load_instant(data["dtstart"]),
        rrules=tuple(data.get("rrule", [])),
        rdates=tuple(load_instant(d) for d in data.get("rdate", [])),
        exdates=tuple(load_instant(d) for d in data.get("exdate", [])),
        recurrence_id=None if recurrence_id is None else load_instant(recurrence_id),
    )


def load_definition_json(path: str | Path) -> EventDefinition:
    """Load an EventDefinition from a JSON file.

    The file holds either the definition itself or {"event": {...}}.
    """
    path = Path(path)
    with open(path) as f:
        data = json.load(f)

    event = data.get("event", data)
    event.setdefault("uid", path.stem)
    return definition_from_dict(event, source=path.name)


def dump_snapshot_json(expansion: RecurExpansion, path: str | Path) -> None:
    """Write expansion state to a JSON file for a later resume."""
    path = Path(path)
    with open(path, "w") as f:
        json.dump(expansion.to_dict(), f, indent=2)


def load_snapshot_json(path: str | Path, **kwargs: Any) -> RecurExpansion:
    """Resume an expansion saved by dump_snapshot_json.

    Keyword arguments are passed to RecurExpansion.from_snapshot.
    """
    path = Path(path)
    with open(path) as f:
        data = json.load(f)
    return RecurExpansion.from_snapshot(data, **kwargs)
