"""Input validation for serialized event definitions."""

from __future__ import annotations

from typing import Any

from recur_expansion.instants import is_date_only, load_instant


def _check_dates(
    data: dict[str, Any],
    field: str,
    date_only: bool | None,
    errors: list[str],
) -> None:
    values = data.get(field, [])
    if not isinstance(values, list):
        errors.append(f"'{field}' must be a list, got {type(values).__name__}")
        return

    for i, raw in enumerate(values):
        try:
            value = load_instant(raw)
        except (ValueError, TypeError) as e:
            errors.append(f"{field}[{i}]: invalid instant {raw!r} - {e}")
            continue

        if date_only is not None and is_date_only(value) != date_only:
            kind = "date" if date_only else "datetime"
            errors.append(f"{field}[{i}]: {raw!r} must be a {kind} like dtstart")


def validate_definition(data: dict[str, Any]) -> list[str]:
    """Validate a definition dict. Returns list of error messages (empty = valid).

    Checks:
    - dtstart is present and parses as a date or datetime
    - rrule is a list of non-empty strings
    - rdate/exdate are lists of instants of the same kind as dtstart
    - recurrence-id, if present, parses as an instant

    Rule text itself is not checked; the rule generator rejects bad rules.
    """
    errors: list[str] = []

    if not isinstance(data, dict):
        return [f"definition must be an object, got {type(data).__name__}"]

    date_only: bool | None = None
    if "dtstart" not in data:
        errors.append("missing 'dtstart'")
    else:
        try:
            date_only = is_date_only(load_instant(data["dtstart"]))
        except (ValueError, TypeError) as e:
            errors.append(f"invalid dtstart {data['dtstart']!r} - {e}")

    rules = data.get("rrule", [])
    if not isinstance(rules, list):
        errors.append(f"'rrule' must be a list, got {type(rules).__name__}")
    else:
        for i, rule in enumerate(rules):
            if not isinstance(rule, str) or not rule.strip():
                errors.append(f"rrule[{i}]: expected non-empty string, got {rule!r}")

    _check_dates(data, "rdate", date_only, errors)
    _check_dates(data, "exdate", date_only, errors)

    if data.get("recurrence-id") is not None:
        try:
            load_instant(data["recurrence-id"])
        except (ValueError, TypeError) as e:
            errors.append(f"invalid recurrence-id {data['recurrence-id']!r} - {e}")

    return errors
